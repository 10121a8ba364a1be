"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from orderedcoll.domain.errors import DuplicateIdentifier
from orderedcoll.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add", data={"id": "base"})
        assert result.ok is True
        assert result.op == "add"
        assert result.data == {"id": "base"}
        assert result.warnings == []
        assert result.error is None

    def test_failure_from_exception(self) -> None:
        exc = DuplicateIdentifier("An item with the same ID already exists: 'a'", id="a")
        result = ServiceResult.failure("add", exc)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "DUPLICATE_ID"
        assert result.error.detail == {"id": "a"}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="delete", data={"count": 2}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 2
        assert parsed["warnings"] == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="NO_DRAFT", message="bad")
        assert error.detail == {}
