"""Shared helpers for the in-place and copy-producing operation sets."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from orderedcoll.domain.collection import OrderedCollection
from orderedcoll.domain.errors import DuplicateIdentifier, InvalidSortKey, MissingIdentity
from orderedcoll.domain.ids import (
    DEFAULT_SEPARATOR,
    DRAFT_MARKER,
    choose_unique_id_from_name,
    has_valid_id,
    validate_id,
)

SortKey = str | Callable[[Mapping[str, Any]], Any]
IdSink = Callable[[str], Any] | MutableMapping[str, Any] | None


def key_getter(key: SortKey) -> Callable[[Mapping[str, Any]], Any]:
    """Turn a field name or callable into an entity -> comparable function.

    A field-name getter raises :class:`InvalidSortKey` for entities that
    lack the field.
    """
    if not isinstance(key, str):
        return key

    def getter(entity: Mapping[str, Any]) -> Any:
        try:
            return entity[key]
        except KeyError as exc:
            item_id = entity.get("id")
            msg = f"Item {item_id!r} has no sort field {key!r}"
            raise InvalidSortKey(msg, field=key, id=item_id) from exc

    return getter


def resolve_id(
    coll: OrderedCollection,
    item: Mapping[str, Any],
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Return the identifier *item* will be stored under in *coll*.

    Explicit identifiers are validated; otherwise one is derived from the
    item's ``name`` and validated too, since a caller-supplied *separator*
    could introduce a dot. Does not modify *coll* or *item*.
    """
    if has_valid_id(item):
        item_id = validate_id(str(item["id"]))
        if item_id in coll.by_id:
            msg = f"An item with the same ID already exists: {item_id!r}"
            raise DuplicateIdentifier(msg, id=item_id)
        return item_id

    name = item.get("name") if item else None
    if name is None:
        msg = "New item needs either an ID or a name"
        raise MissingIdentity(msg)
    return validate_id(choose_unique_id_from_name(name, coll.by_id, separator=separator))


def is_draft_item(item: Mapping[str, Any] | None) -> bool:
    """Whether *item* is keyed by the draft marker."""
    return bool(item) and item.get("id") == DRAFT_MARKER


def store_id(id_sink: IdSink, item_id: str) -> None:
    """Report *item_id* to a callback or into a mapping's ``id`` slot."""
    if callable(id_sink):
        id_sink(item_id)
    elif isinstance(id_sink, MutableMapping):
        id_sink["id"] = item_id
