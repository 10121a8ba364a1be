"""In-place collection operations.

INVARIANT: callers own the collection exclusively. Every function here
mutates its ``coll`` argument; use :mod:`orderedcoll.ops.immutable` for
collections shared with other consumers.

Insertions return the identifier the item was stored under. Failed
operations raise a :class:`~orderedcoll.domain.errors.CollectionError`
before anything is modified.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterable, Mapping
from typing import Any

from orderedcoll.domain.collection import OrderedCollection
from orderedcoll.domain.drafts import DraftPolicy, DraftState, draft_state, is_valid_transition
from orderedcoll.domain.errors import DraftPending, NoDraft
from orderedcoll.domain.ids import DEFAULT_SEPARATOR, DRAFT_MARKER, has_valid_id
from orderedcoll.ops._helpers import (
    IdSink,
    SortKey,
    is_draft_item,
    key_getter,
    resolve_id,
    store_id,
)

logger = logging.getLogger(__name__)


# --- Insertion ---


def add_at(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    index: int,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Insert a copy of *item* at *index* of the order.

    Negative indices insert at the front; indices past the end append.
    An item keyed by the draft marker is a draft promotion: it gets a
    name-derived identifier and the pending draft is cleared.
    """
    entity = dict(item)
    entity["id"] = resolve_id(coll, entity, separator=separator)
    return _insert(coll, entity, index, promoting=is_draft_item(item))


def add_sorted(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    key: SortKey = "id",
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Insert *item* where it keeps the order sorted by *key*.

    The order must already be sorted by *key*, given as a field name or a
    function of an entity. Ties land before existing equal-keyed entities.
    """
    entity = dict(item)
    entity["id"] = resolve_id(coll, entity, separator=separator)
    index = sorted_index(coll, entity, key)
    return _insert(coll, entity, index, promoting=is_draft_item(item))


def sorted_index(coll: OrderedCollection, item: Mapping[str, Any], key: SortKey = "id") -> int:
    """Binary-search the insertion point for *item* in a *key*-sorted order.

    Order slots without an entity compare with *item*'s own key.
    """
    if key == "id":
        return bisect_left(coll.order, item["id"])

    getter = key_getter(key)
    target = getter(item)

    def slot_key(item_id: str) -> Any:
        existing = coll.by_id.get(item_id)
        return target if existing is None else getter(existing)

    return bisect_left(coll.order, target, key=slot_key)


def add_to_front(coll: OrderedCollection, item: Mapping[str, Any], **kwargs: Any) -> str:
    """Insert *item* before every other entity."""
    return add_at(coll, item, 0, **kwargs)


def add_to_back(coll: OrderedCollection, item: Mapping[str, Any], **kwargs: Any) -> str:
    """Insert *item* after every other entity."""
    return add_at(coll, item, len(coll.order), **kwargs)


def replace_or_add_sorted(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    key: SortKey = "id",
    **kwargs: Any,
) -> str:
    """Replace the stored entity sharing *item*'s id, or sorted-insert *item*.

    A replaced entity keeps its order position. An item whose id is not
    stored yet is inserted under that id.
    """
    if has_valid_id(item) and item["id"] in coll.by_id:
        return _replace(coll, item)
    return add_sorted(coll, item, key, **kwargs)


def replace_or_add_to_front(coll: OrderedCollection, item: Mapping[str, Any], **kwargs: Any) -> str:
    """Replace the stored entity sharing *item*'s id, or insert *item* at the front."""
    if has_valid_id(item) and item["id"] in coll.by_id:
        return _replace(coll, item)
    return add_to_front(coll, item, **kwargs)


def _replace(coll: OrderedCollection, item: Mapping[str, Any]) -> str:
    entity = dict(item)
    coll.by_id[entity["id"]] = entity
    return entity["id"]


def _insert(
    coll: OrderedCollection,
    entity: dict[str, Any],
    index: int,
    *,
    promoting: bool,
) -> str:
    # entity already carries its resolved id
    index = min(max(index, 0), len(coll.order))
    coll.by_id[entity["id"]] = entity
    coll.order.insert(index, entity["id"])
    if promoting:
        coll.draft = None
    logger.debug("Added %s at %d (promoted=%s)", entity["id"], index, promoting)
    return entity["id"]


# --- Deletion ---


def delete_by_id(coll: OrderedCollection, item_id: str) -> None:
    """Remove *item_id* from the map and the order.

    Unknown identifiers are ignored. The draft marker discards the draft.
    """
    delete_by_ids(coll, [item_id])


def delete_by_ids(coll: OrderedCollection, item_ids: Iterable[str]) -> None:
    """Remove every identifier in *item_ids*; unknown ones are ignored."""
    to_remove = set(item_ids)
    if not to_remove:
        return
    if DRAFT_MARKER in to_remove:
        coll.draft = None
    for item_id in to_remove:
        coll.by_id.pop(item_id, None)
    coll.order[:] = [item_id for item_id in coll.order if item_id not in to_remove]
    logger.debug("Deleted %d id(s)", len(to_remove))


def clear(coll: OrderedCollection) -> None:
    """Remove every committed entity. A pending draft is kept."""
    coll.by_id.clear()
    coll.order.clear()


# --- Draft lifecycle ---


def create_draft(
    coll: OrderedCollection,
    id_sink: IdSink = None,
    *,
    policy: DraftPolicy = DraftPolicy.REJECT,
) -> str:
    """Start a new draft and report its identifier to *id_sink*.

    *id_sink* may be a callable (called with the identifier) or a mutable
    mapping (its ``id`` key is set); anything else is ignored. With an
    existing draft, ``REJECT`` raises :class:`DraftPending` and ``REPLACE``
    discards the old draft.
    """
    if not is_valid_transition(draft_state(coll), DraftState.DRAFTING):
        if policy == DraftPolicy.REJECT:
            msg = "A draft item is already pending in this collection"
            raise DraftPending(msg, id=DRAFT_MARKER)
        logger.debug("Replacing pending draft")

    coll.draft = {"id": DRAFT_MARKER}
    store_id(id_sink, DRAFT_MARKER)
    return DRAFT_MARKER


def edit_draft(coll: OrderedCollection, changes: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *changes* into the pending draft and return it."""
    if draft_state(coll) is not DraftState.DRAFTING:
        msg = "There is no draft item to edit"
        raise NoDraft(msg)
    coll.draft.update(changes)
    return coll.draft


def promote_draft(
    coll: OrderedCollection,
    *,
    index: int = 0,
    key: SortKey | None = None,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Commit the pending draft and return its new identifier.

    The draft is inserted at *index*, or sorted by *key* when given. If
    the draft was edited to carry a real ``id``, that id is validated like
    any explicit one. On failure the draft stays pending.
    """
    if not is_valid_transition(draft_state(coll), DraftState.PROMOTED):
        msg = "There is no draft item to promote"
        raise NoDraft(msg)

    entity = dict(coll.draft)
    entity["id"] = resolve_id(coll, entity, separator=separator)
    position = index if key is None else sorted_index(coll, entity, key)
    return _insert(coll, entity, position, promoting=True)


def discard_draft(coll: OrderedCollection) -> None:
    """Drop the pending draft, if any."""
    coll.draft = None
