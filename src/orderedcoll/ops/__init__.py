"""Collection operations in two ownership flavours.

- :mod:`orderedcoll.ops.inplace` mutates the collection it is given. Use it
  only on a collection you own exclusively.
- :mod:`orderedcoll.ops.immutable` returns new collections and never touches
  its input. Use it on snapshots shared with other consumers.
"""
