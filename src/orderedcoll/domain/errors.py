"""Error kinds raised by collection operations.

Every error is deterministic and leaves the collection it was raised for
unchanged. Each kind carries a stable ``code`` that the service layer copies
into :class:`~orderedcoll.services.result.ServiceError`.
"""

from __future__ import annotations

from typing import Any, ClassVar


class CollectionError(ValueError):
    """Base class for all ordered-collection errors."""

    code: ClassVar[str] = "COLLECTION_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class MissingIdentity(CollectionError):
    """Item has neither an identifier nor a name to derive one from."""

    code = "MISSING_IDENTITY"


class DuplicateIdentifier(CollectionError):
    """Item identifier is already taken in the collection."""

    code = "DUPLICATE_ID"


class InvalidIdentifier(CollectionError):
    """Identifier contains the reserved path separator."""

    code = "INVALID_ID"


class DraftPending(CollectionError):
    """A draft already exists and the draft policy forbids replacing it."""

    code = "DRAFT_PENDING"


class NoDraft(CollectionError):
    """A draft operation was requested but no draft exists."""

    code = "NO_DRAFT"


class InvariantViolation(CollectionError):
    """The collection structure is not well-formed."""

    code = "INVARIANT_VIOLATION"


class InvalidSortKey(CollectionError):
    """An entity lacks the field used as the sorting key."""

    code = "INVALID_SORT_KEY"
