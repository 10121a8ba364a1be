"""Identifier rules, validation, and name-derived generation.

Two ways an entity gets its identifier:
- Explicit: the item carries an ``id`` that is validated as-is.
- Derived: the ``id`` is generated from the item's ``name``, normalized
  and suffixed until it is unique within the collection.

INVARIANT: identifiers never contain ``.``; collaborators use it as the
path separator in nested-field keys (see :func:`get_key`).
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Collection, Mapping
from typing import Any

from orderedcoll.domain.errors import InvalidIdentifier

DRAFT_MARKER = "@@newItem"
PATH_SEPARATOR = "."
DEFAULT_SEPARATOR = "-"
DEFAULT_FALLBACK = "item"


def normalize_name(name: str, *, separator: str = DEFAULT_SEPARATOR) -> str:
    """Normalize a human-readable name into an identifier stem.

    Lowercases, applies NFKC normalization, strips punctuation (the path
    separator included), and joins words with *separator*.

    Examples:
        >>> normalize_name("Base Map")
        'base-map'
        >>> normalize_name("  v1.2  layer ")
        'v12-layer'
    """
    text = unicodedata.normalize("NFKC", str(name)).lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", " ", text).strip()
    return text.replace(" ", separator)


def choose_unique_id(
    base: str,
    existing: Collection[str],
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Return *base* if unused, otherwise *base* with the lowest free numeric suffix.

    The draft marker always counts as used.
    """
    if base not in existing and base != DRAFT_MARKER:
        return base
    index = 2
    while True:
        candidate = f"{base}{separator}{index}"
        if candidate not in existing:
            return candidate
        index += 1


def choose_unique_id_from_name(
    name: str,
    existing: Collection[str],
    *,
    separator: str = DEFAULT_SEPARATOR,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """Derive a unique identifier from *name*.

    Deterministic for a given name and set of existing identifiers. Names
    that normalize to nothing (e.g. only punctuation) use *fallback* as
    the stem.
    """
    base = normalize_name(name, separator=separator) or fallback
    return choose_unique_id(base, existing, separator=separator)


def has_valid_id(item: Mapping[str, Any] | None) -> bool:
    """Whether *item* carries a real identifier.

    A real identifier is present, not an empty string, and not the draft
    marker.
    """
    if not item:
        return False
    item_id = item.get("id")
    return item_id is not None and item_id != "" and item_id != DRAFT_MARKER


def validate_id(item_id: str) -> str:
    """Return *item_id* unchanged, or raise if it contains the path separator."""
    if PATH_SEPARATOR in item_id:
        msg = f"Item ID cannot contain dots: {item_id!r}"
        raise InvalidIdentifier(msg, id=item_id)
    return item_id


def get_key(item_id: str, *sub_keys: str) -> str:
    """Build a nested-field path addressing an item of a collection.

    Examples:
        >>> get_key("base")
        'byId.base'
        >>> get_key("base", "style", "color")
        'byId.base.style.color'
    """
    validate_id(item_id)
    sub_key = PATH_SEPARATOR.join(sub_keys)
    return f"byId.{item_id}.{sub_key}" if sub_key else f"byId.{item_id}"
