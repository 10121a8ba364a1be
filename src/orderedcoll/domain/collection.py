"""OrderedCollection — identifier map plus explicit order, with an optional draft.

Structure (one collection):
- ``by_id``: identifier -> entity. Keys are unique by construction.
- ``order``: identifiers in display order, independent of insertion time.
- ``draft``: the single entity being created but not yet committed. It is
  kept outside ``by_id`` and never appears in ``order``.

Invariants:
- No identifier appears twice in ``order``.
- Every committed entity is reachable through exactly one ``order`` slot.
- Identifiers never contain ``.``.

``order`` may transiently hold dangling identifiers (no entity behind
them). Every read helper in this module skips them instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from orderedcoll.domain.errors import InvariantViolation
from orderedcoll.domain.ids import DRAFT_MARKER, PATH_SEPARATOR

Entity = dict[str, Any]

__all__ = [
    "DRAFT_MARKER",
    "Entity",
    "OrderedCollection",
    "check_invariants",
    "contains",
    "dangling_ids",
    "first",
    "get",
    "get_draft",
    "is_well_formed",
    "last",
    "to_sequence",
]


@dataclass
class OrderedCollection:
    """Ordered collection of uniquely-identified entities."""

    by_id: dict[str, Entity] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)
    draft: Entity | None = None

    @classmethod
    def from_items(cls, items: list[Mapping[str, Any]]) -> OrderedCollection:
        """Build a collection whose order follows *items*; each needs an ``id``."""
        coll = cls()
        for item in items:
            entity = dict(item)
            coll.by_id[entity["id"]] = entity
            coll.order.append(entity["id"])
        return coll

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> OrderedCollection:
        """Load from the ``{"byId": ..., "order": ...}`` state-tree shape.

        An entity stored under the draft marker becomes the pending draft.
        A missing ``order`` falls back to the key order of ``byId``.
        """
        by_id = {key: dict(value) for key, value in state.get("byId", {}).items()}
        draft = by_id.pop(DRAFT_MARKER, None)
        order = state.get("order")
        return cls(
            by_id=by_id,
            order=list(order) if order is not None else list(by_id),
            draft=draft,
        )

    def to_state(self) -> dict[str, Any]:
        """Dump to the ``{"byId": ..., "order": ...}`` state-tree shape."""
        by_id = {key: dict(value) for key, value in self.by_id.items()}
        if self.draft is not None:
            by_id[DRAFT_MARKER] = dict(self.draft)
        return {"byId": by_id, "order": list(self.order)}

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, str) and contains(self, item_id)

    def __iter__(self) -> Iterator[Entity]:
        return iter(to_sequence(self))


# --- Lookups ---


def contains(coll: OrderedCollection, item_id: str) -> bool:
    """Whether *item_id* names a committed entity.

    The draft marker is never a usable identifier here.
    """
    return item_id != DRAFT_MARKER and item_id in coll.by_id


def get(coll: OrderedCollection, item_id: str, default: Any = None) -> Any:
    """Return the committed entity for *item_id*, or *default*."""
    if item_id == DRAFT_MARKER:
        return default
    return coll.by_id.get(item_id, default)


def get_draft(coll: OrderedCollection) -> Entity | None:
    """Return the pending draft entity, if any."""
    return coll.draft


# --- Ordered reads ---


def to_sequence(coll: OrderedCollection) -> list[Entity]:
    """Entities in ``order``, skipping dangling identifiers.

    Returns a fresh list on every call.
    """
    by_id = coll.by_id
    return [by_id[item_id] for item_id in coll.order if item_id in by_id]


def first(coll: OrderedCollection) -> Entity | None:
    """The entity at the first resolvable ``order`` position, or None."""
    for item_id in coll.order:
        entity = coll.by_id.get(item_id)
        if entity is not None:
            return entity
    return None


def last(coll: OrderedCollection) -> Entity | None:
    """The entity at the last resolvable ``order`` position, or None."""
    for item_id in reversed(coll.order):
        entity = coll.by_id.get(item_id)
        if entity is not None:
            return entity
    return None


def dangling_ids(coll: OrderedCollection) -> list[str]:
    """Identifiers in ``order`` that have no entity behind them."""
    return [item_id for item_id in coll.order if item_id not in coll.by_id]


# --- Well-formedness ---


def check_invariants(coll: OrderedCollection) -> None:
    """Raise :class:`InvariantViolation` if the collection is malformed.

    Dangling identifiers are tolerated; duplicates in ``order``, committed
    entities missing from ``order``, dotted identifiers, and a draft marker
    inside ``by_id`` or ``order`` are not.
    """
    seen: set[str] = set()
    repeated: set[str] = set()
    for item_id in coll.order:
        if item_id in seen:
            repeated.add(item_id)
        seen.add(item_id)
    duplicates = sorted(repeated)
    if duplicates:
        msg = f"Identifiers appear more than once in order: {duplicates}"
        raise InvariantViolation(msg, ids=duplicates)

    unordered = sorted(set(coll.by_id) - seen)
    if unordered:
        msg = f"Entities are not reachable through order: {unordered}"
        raise InvariantViolation(msg, ids=unordered)

    dotted = sorted(item_id for item_id in seen | set(coll.by_id) if PATH_SEPARATOR in item_id)
    if dotted:
        msg = f"Identifiers contain dots: {dotted}"
        raise InvariantViolation(msg, ids=dotted)

    if DRAFT_MARKER in seen:
        msg = "Draft marker must not be part of the committed collection"
        raise InvariantViolation(msg, ids=[DRAFT_MARKER])


def is_well_formed(coll: OrderedCollection) -> bool:
    """Boolean form of :func:`check_invariants`."""
    try:
        check_invariants(coll)
    except InvariantViolation:
        return False
    return True
