"""orderedcoll — ordered collections of uniquely-identified entities.

An ordered collection pairs an identifier map with an explicit order
sequence, plus at most one pending draft entity that is kept out of the
order until it is promoted.
"""

from __future__ import annotations

from orderedcoll.domain.collection import (
    DRAFT_MARKER,
    OrderedCollection,
    contains,
    first,
    get,
    get_draft,
    last,
    to_sequence,
)
from orderedcoll.domain.errors import (
    CollectionError,
    DraftPending,
    DuplicateIdentifier,
    InvalidIdentifier,
    InvalidSortKey,
    MissingIdentity,
    NoDraft,
)
from orderedcoll.ops import immutable, inplace

__version__ = "0.3.0"

__all__ = [
    "DRAFT_MARKER",
    "CollectionError",
    "DraftPending",
    "DuplicateIdentifier",
    "InvalidIdentifier",
    "InvalidSortKey",
    "MissingIdentity",
    "NoDraft",
    "OrderedCollection",
    "__version__",
    "contains",
    "first",
    "get",
    "get_draft",
    "immutable",
    "inplace",
    "last",
    "to_sequence",
]
