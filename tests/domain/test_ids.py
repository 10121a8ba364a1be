"""Tests for identifier normalization, generation, and validation."""

import pytest

from orderedcoll.domain.errors import InvalidIdentifier
from orderedcoll.domain.ids import (
    DRAFT_MARKER,
    choose_unique_id,
    choose_unique_id_from_name,
    get_key,
    has_valid_id,
    normalize_name,
    validate_id,
)


class TestNormalizeName:
    def test_lowercases(self) -> None:
        assert normalize_name("Foo") == "foo"

    def test_joins_words_with_separator(self) -> None:
        assert normalize_name("Base Map") == "base-map"

    def test_custom_separator(self) -> None:
        assert normalize_name("Base Map", separator="_") == "base_map"

    def test_strips_dots_and_punctuation(self) -> None:
        assert normalize_name("v1.2: Layer!") == "v12-layer"

    def test_collapses_whitespace_and_dashes(self) -> None:
        assert normalize_name("  lots -- of   space  ") == "lots-of-space"

    def test_nfkc_normalization(self) -> None:
        assert normalize_name("ﬁle") == "file"  # fi ligature -> fi

    def test_only_punctuation(self) -> None:
        assert normalize_name("?!...") == ""


class TestChooseUniqueId:
    def test_unused_base(self) -> None:
        assert choose_unique_id("foo", {"bar"}) == "foo"

    def test_suffixes_on_collision(self) -> None:
        assert choose_unique_id("foo", {"foo"}) == "foo-2"

    def test_skips_taken_suffixes(self) -> None:
        assert choose_unique_id("foo", {"foo", "foo-2", "foo-3"}) == "foo-4"

    def test_draft_marker_is_never_chosen(self) -> None:
        assert choose_unique_id(DRAFT_MARKER, set()) == f"{DRAFT_MARKER}-2"


class TestChooseUniqueIdFromName:
    def test_deterministic(self) -> None:
        existing = {"foo", "bar"}
        assert choose_unique_id_from_name("Foo", existing) == choose_unique_id_from_name(
            "Foo", existing
        )

    def test_derives_from_name(self) -> None:
        assert choose_unique_id_from_name("Foo", set()) == "foo"

    def test_unique_against_existing(self) -> None:
        assert choose_unique_id_from_name("Foo", {"foo"}) == "foo-2"

    def test_fallback_stem(self) -> None:
        assert choose_unique_id_from_name("???", set()) == "item"
        assert choose_unique_id_from_name("???", {"item"}, fallback="item") == "item-2"

    def test_never_contains_dots(self) -> None:
        assert "." not in choose_unique_id_from_name("a.b.c", set())


class TestHasValidId:
    @pytest.mark.parametrize(
        "item",
        [None, {}, {"name": "x"}, {"id": None}, {"id": ""}, {"id": DRAFT_MARKER}],
    )
    def test_invalid(self, item: dict | None) -> None:
        assert not has_valid_id(item)

    def test_valid(self) -> None:
        assert has_valid_id({"id": "layer"})


class TestValidateId:
    def test_returns_id(self) -> None:
        assert validate_id("layer-1") == "layer-1"

    def test_rejects_dots(self) -> None:
        with pytest.raises(InvalidIdentifier) as excinfo:
            validate_id("a.b")
        assert excinfo.value.code == "INVALID_ID"
        assert excinfo.value.detail == {"id": "a.b"}


class TestGetKey:
    def test_item_only(self) -> None:
        assert get_key("base") == "byId.base"

    def test_with_sub_keys(self) -> None:
        assert get_key("base", "style", "color") == "byId.base.style.color"

    def test_rejects_dotted_id(self) -> None:
        with pytest.raises(InvalidIdentifier):
            get_key("a.b", "name")
