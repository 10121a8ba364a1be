"""CollectionStore — a result-returning holder of one collection snapshot.

The store never mutates a snapshot it has handed out: every operation goes
through :mod:`orderedcoll.ops.immutable` and swaps in the new collection
only on success. Readers holding an older ``snapshot`` keep a consistent
view.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import structlog

from orderedcoll.config.logging import configure_logging
from orderedcoll.config.settings import CollectionSettings
from orderedcoll.domain.collection import (
    DRAFT_MARKER,
    OrderedCollection,
    contains,
    dangling_ids,
    to_sequence,
)
from orderedcoll.domain.drafts import DraftState, draft_state, is_valid_transition
from orderedcoll.domain.errors import CollectionError
from orderedcoll.ops import immutable
from orderedcoll.ops._helpers import SortKey
from orderedcoll.services.result import ServiceResult

log = structlog.get_logger(__name__)


class CollectionStore:
    """Holds an ordered collection and applies copy-producing operations.

    Usage::

        store = CollectionStore.load()
        result = store.add({"name": "Base map"})
        if result.ok:
            layer_id = result.data["id"]
    """

    def __init__(
        self,
        collection: OrderedCollection | None = None,
        settings: CollectionSettings | None = None,
    ) -> None:
        self._collection = collection if collection is not None else OrderedCollection()
        self._settings = settings if settings is not None else CollectionSettings()

    @classmethod
    def load(
        cls,
        collection: OrderedCollection | None = None,
        **overrides: Any,
    ) -> CollectionStore:
        """Build a store from discovered settings and configure logging from them.

        *overrides* are passed to :meth:`CollectionSettings.load`, so
        ``config_path``, ``start`` and any settings field are accepted.
        """
        settings = CollectionSettings.load(**overrides)
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        log.debug("collection.load", config_path=str(settings.config_path or ""))
        return cls(collection, settings)

    @property
    def snapshot(self) -> OrderedCollection:
        """The current collection. Treat it as read-only."""
        return self._collection

    @property
    def settings(self) -> CollectionSettings:
        return self._settings

    def items(self) -> list[dict[str, Any]]:
        """Committed entities in order."""
        return to_sequence(self._collection)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def add(self, item: Mapping[str, Any], *, index: int | None = None) -> ServiceResult:
        """Insert *item* at *index*, or at the back when *index* is None."""
        position = len(self._collection.order) if index is None else index
        return self._insert(
            "add",
            lambda coll: immutable.add_at(coll, item, position, separator=self._separator),
        )

    def add_sorted(self, item: Mapping[str, Any], key: SortKey | None = None) -> ServiceResult:
        """Insert *item* keeping the order sorted by *key* (default from settings)."""
        sort_key = key if key is not None else self._settings.ordering.default_key
        return self._insert(
            "add_sorted",
            lambda coll: immutable.add_sorted(coll, item, sort_key, separator=self._separator),
        )

    def upsert(self, item: Mapping[str, Any], key: SortKey | None = None) -> ServiceResult:
        """Replace the entity with *item*'s id, or sorted-insert *item*."""
        sort_key = key if key is not None else self._settings.ordering.default_key
        return self._insert(
            "upsert",
            lambda coll: immutable.replace_or_add_sorted(
                coll, item, sort_key, separator=self._separator
            ),
        )

    # ------------------------------------------------------------------
    # Deletion and ordering
    # ------------------------------------------------------------------

    def delete(self, item_ids: Iterable[str]) -> ServiceResult:
        """Remove *item_ids*. Identifiers that are not stored are reported as warnings."""
        requested = list(dict.fromkeys(item_ids))
        deleted = [item_id for item_id in requested if contains(self._collection, item_id)]
        ignored = [
            item_id for item_id in requested if item_id not in deleted and item_id != DRAFT_MARKER
        ]

        self._collection = immutable.without_ids(self._collection, requested)
        log.debug("collection.delete", deleted=deleted, ignored=ignored)
        return ServiceResult(
            ok=True,
            op="delete",
            data={"deleted": deleted, "count": len(deleted)},
            warnings=[f"No item with ID {item_id!r}" for item_id in ignored],
        )

    def reorder(self, new_order: Sequence[str]) -> ServiceResult:
        """Replace the order verbatim, warning about dangling identifiers."""
        self._collection = immutable.reorder(self._collection, new_order)
        dangling = dangling_ids(self._collection)
        log.debug("collection.reorder", size=len(new_order), dangling=len(dangling))
        return ServiceResult(
            ok=True,
            op="reorder",
            data={"order": list(self._collection.order)},
            warnings=[f"Order references missing item {item_id!r}" for item_id in dangling],
        )

    def clear(self) -> ServiceResult:
        count = len(self._collection.by_id)
        self._collection = immutable.clear(self._collection)
        return ServiceResult(ok=True, op="clear", data={"count": count})

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------

    def begin_draft(self) -> ServiceResult:
        """Start a draft using the configured draft policy."""
        policy = self._settings.drafts.policy
        return self._apply(
            "begin_draft",
            lambda coll: (immutable.create_draft(coll, policy=policy), {"id": DRAFT_MARKER}),
        )

    def edit_draft(self, changes: Mapping[str, Any]) -> ServiceResult:
        return self._apply(
            "edit_draft",
            lambda coll: _with_draft(immutable.edit_draft(coll, changes)),
        )

    def commit_draft(self, *, index: int = 0, key: SortKey | None = None) -> ServiceResult:
        """Promote the draft at *index*, or in *key* order when given."""
        return self._insert(
            "commit_draft",
            lambda coll: immutable.promote_draft(
                coll, index=index, key=key, separator=self._separator
            ),
        )

    def discard_draft(self) -> ServiceResult:
        had_draft = is_valid_transition(draft_state(self._collection), DraftState.DISCARDED)
        self._collection = immutable.discard_draft(self._collection)
        return ServiceResult(ok=True, op="discard_draft", data={"discarded": had_draft})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _separator(self) -> str:
        return self._settings.naming.separator

    def _insert(
        self,
        op: str,
        fn: Callable[[OrderedCollection], tuple[OrderedCollection, str]],
    ) -> ServiceResult:
        def run(coll: OrderedCollection) -> tuple[OrderedCollection, dict[str, Any]]:
            result, item_id = fn(coll)
            index = result.order.index(item_id) if item_id in result.order else None
            return result, {"id": item_id, "index": index}

        return self._apply(op, run)

    def _apply(
        self,
        op: str,
        fn: Callable[[OrderedCollection], tuple[OrderedCollection, dict[str, Any]]],
    ) -> ServiceResult:
        try:
            result, data = fn(self._collection)
        except CollectionError as exc:
            log.warning("collection.rejected", op=op, code=exc.code, reason=exc.message)
            return ServiceResult.failure(op, exc)
        self._collection = result
        log.debug(f"collection.{op}", **data)
        return ServiceResult(ok=True, op=op, data=data)


def _with_draft(coll: OrderedCollection) -> tuple[OrderedCollection, dict[str, Any]]:
    return coll, {"draft": dict(coll.draft or {})}
