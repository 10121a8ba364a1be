"""ServiceResult and ServiceError — the service-layer contract.

INVARIANT: every CollectionStore method returns a ServiceResult.
Collection errors become ``ok=False`` results carrying the error's code,
they are never raised across this boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from orderedcoll.domain.errors import CollectionError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CollectionError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: CollectionError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
