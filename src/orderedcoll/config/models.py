"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, orderedcoll.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from orderedcoll.domain.drafts import DraftPolicy
from orderedcoll.domain.ids import DEFAULT_SEPARATOR, PATH_SEPARATOR


class NamingConfig(BaseModel):
    """[naming] section."""

    model_config = {"frozen": True}

    separator: str = DEFAULT_SEPARATOR

    @field_validator("separator")
    @classmethod
    def _no_path_separator(cls, value: str) -> str:
        if PATH_SEPARATOR in value:
            msg = f"must not contain {PATH_SEPARATOR!r}"
            raise ValueError(msg)
        return value


class DraftsConfig(BaseModel):
    """[drafts] section."""

    model_config = {"frozen": True}

    policy: DraftPolicy = DraftPolicy.REJECT


class OrderingConfig(BaseModel):
    """[ordering] section."""

    model_config = {"frozen": True}

    default_key: str = "id"

