"""Draft-item lifecycle states and policies.

A draft is a single placeholder entity that a user is editing before it
gets a real identifier and a place in the order:

    absent -> drafting -> promoted | discarded

Promoted and discarded are terminal for that draft; the collection itself
is back to having no draft, so a new one may start.
"""

from __future__ import annotations

from enum import StrEnum

from orderedcoll.domain.collection import OrderedCollection


class DraftState(StrEnum):
    """Lifecycle states of a collection draft."""

    ABSENT = "absent"
    DRAFTING = "drafting"
    PROMOTED = "promoted"
    DISCARDED = "discarded"


class DraftPolicy(StrEnum):
    """What ``create_draft`` does when a draft is already pending."""

    REJECT = "reject"
    REPLACE = "replace"


DRAFT_TRANSITIONS: dict[str, list[str]] = {
    "absent": ["drafting"],
    "drafting": ["promoted", "discarded"],
    "promoted": [],
    "discarded": [],
}


def is_valid_transition(current: str, target: str) -> bool:
    """Check if moving a draft from *current* to *target* is allowed."""
    return target in DRAFT_TRANSITIONS.get(current, [])


def draft_state(coll: OrderedCollection) -> DraftState:
    """Current state of the collection's draft slot."""
    return DraftState.DRAFTING if coll.draft is not None else DraftState.ABSENT
