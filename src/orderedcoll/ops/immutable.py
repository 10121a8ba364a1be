"""Copy-producing collection operations.

INVARIANT: the input collection is never modified. Each function returns
a new :class:`OrderedCollection` with fresh ``by_id``, ``order`` and
``draft`` containers; entity dicts are shared and treated as immutable
values.

Insertions return ``(collection, item_id)``; everything else returns the
new collection. Results are equal to what the matching
:mod:`orderedcoll.ops.inplace` function would leave behind.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from orderedcoll.domain.collection import OrderedCollection
from orderedcoll.domain.drafts import DraftPolicy
from orderedcoll.domain.ids import DRAFT_MARKER
from orderedcoll.ops import inplace
from orderedcoll.ops._helpers import IdSink, SortKey


def copy_collection(coll: OrderedCollection) -> OrderedCollection:
    """Shallow structural copy: new containers, shared entities."""
    return OrderedCollection(
        by_id=dict(coll.by_id),
        order=list(coll.order),
        draft=dict(coll.draft) if coll.draft is not None else None,
    )


# --- Insertion ---


def add_at(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    index: int,
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* inserted at *index*."""
    result = copy_collection(coll)
    return result, inplace.add_at(result, item, index, **kwargs)


def add_sorted(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    key: SortKey = "id",
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* inserted in *key* order."""
    result = copy_collection(coll)
    return result, inplace.add_sorted(result, item, key, **kwargs)


def add_to_front(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* inserted at the front."""
    result = copy_collection(coll)
    return result, inplace.add_to_front(result, item, **kwargs)


def add_to_back(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* appended at the back."""
    result = copy_collection(coll)
    return result, inplace.add_to_back(result, item, **kwargs)


def replace_or_add_sorted(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    key: SortKey = "id",
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* replacing its stored version, or sorted-inserted."""
    result = copy_collection(coll)
    return result, inplace.replace_or_add_sorted(result, item, key, **kwargs)


def replace_or_add_to_front(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    **kwargs: Any,
) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with *item* replacing its stored version, or added at the front."""
    result = copy_collection(coll)
    return result, inplace.replace_or_add_to_front(result, item, **kwargs)


# --- Deletion ---


def without_id(coll: OrderedCollection, item_id: str) -> OrderedCollection:
    """Copy of *coll* without *item_id*; unknown identifiers are ignored."""
    return without_ids(coll, [item_id])


def without_ids(coll: OrderedCollection, item_ids: Iterable[str]) -> OrderedCollection:
    """Copy of *coll* without any of *item_ids*; unknown identifiers are ignored."""
    to_remove = set(item_ids)
    draft = coll.draft
    return OrderedCollection(
        by_id={key: value for key, value in coll.by_id.items() if key not in to_remove},
        order=[item_id for item_id in coll.order if item_id not in to_remove],
        draft=dict(draft) if draft is not None and DRAFT_MARKER not in to_remove else None,
    )


def clear(coll: OrderedCollection) -> OrderedCollection:
    """Empty copy of *coll* that keeps a pending draft."""
    return OrderedCollection(draft=dict(coll.draft) if coll.draft is not None else None)


# --- Ordering ---


def reorder(coll: OrderedCollection, new_order: Sequence[str]) -> OrderedCollection:
    """Copy of *coll* with ``order`` replaced by *new_order* verbatim.

    No validation: *new_order* must not repeat identifiers and should
    cover every committed entity.
    """
    result = copy_collection(coll)
    result.order = list(new_order)
    return result


# --- Draft lifecycle ---


def create_draft(
    coll: OrderedCollection,
    id_sink: IdSink = None,
    *,
    policy: DraftPolicy = DraftPolicy.REJECT,
) -> OrderedCollection:
    """Copy of *coll* holding a new empty draft; see :func:`inplace.create_draft`."""
    result = copy_collection(coll)
    inplace.create_draft(result, id_sink, policy=policy)
    return result


def edit_draft(coll: OrderedCollection, changes: Mapping[str, Any]) -> OrderedCollection:
    """Copy of *coll* with *changes* merged into its draft."""
    result = copy_collection(coll)
    inplace.edit_draft(result, changes)
    return result


def promote_draft(coll: OrderedCollection, **kwargs: Any) -> tuple[OrderedCollection, str]:
    """Copy of *coll* with its draft committed; see :func:`inplace.promote_draft`."""
    result = copy_collection(coll)
    return result, inplace.promote_draft(result, **kwargs)


def discard_draft(coll: OrderedCollection) -> OrderedCollection:
    """Copy of *coll* without its draft."""
    return without_id(coll, DRAFT_MARKER)
