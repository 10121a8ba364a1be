"""Domain layer — collection structure, identifiers, and errors.

This layer depends only on the stdlib.
It must never import from ops, services, or config.
"""
