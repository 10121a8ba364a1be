"""Shared pytest fixtures and test helpers for orderedcoll tests."""

from __future__ import annotations

import os

import pytest

from orderedcoll.domain.collection import OrderedCollection


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ORDEREDCOLL_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("ORDEREDCOLL_"):
            monkeypatch.delenv(name)


@pytest.fixture
def empty() -> OrderedCollection:
    return OrderedCollection()


@pytest.fixture
def ranked() -> OrderedCollection:
    """Two entities sorted by ``rank``: a (1) then b (3)."""
    return OrderedCollection(
        by_id={"a": {"id": "a", "rank": 1}, "b": {"id": "b", "rank": 3}},
        order=["a", "b"],
    )


@pytest.fixture
def layers() -> OrderedCollection:
    """Three named entities in a user-chosen, unsorted order."""
    return OrderedCollection.from_items(
        [
            {"id": "osm", "name": "OpenStreetMap"},
            {"id": "base", "name": "Base map"},
            {"id": "features", "name": "Features"},
        ]
    )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def ids(coll: OrderedCollection) -> list[str]:
    """Identifiers of the committed entities, in order."""
    return [entity["id"] for entity in coll]


def snapshot(coll: OrderedCollection) -> dict[str, object]:
    """Deep-ish copy of a collection for before/after comparisons."""
    return coll.to_state()
