# Area: Commands
"""
scrimflow._commands.schemas — Command payload models
====================================================

Pydantic models for the ``payload`` of each incoming command. A
payload that fails validation is answered with INVALID_PAYLOAD and
never reaches the lobby engine.
"""

from __future__ import annotations
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .._lobby.enums import MatchFormat
from ..regions import COMPETITIVE_REGIONS

EPIC_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._\- ]+$")


def _check_region(value: str) -> str:
    if value not in COMPETITIVE_REGIONS:
        valid = ", ".join(COMPETITIVE_REGIONS)
        raise ValueError(f"unknown region '{value}' (expected one of: {valid})")
    return value


class CommandPayload(BaseModel):
    """Base for all payload models; unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class EmptyPayload(CommandPayload):
    pass


class OpenLobbyPayload(CommandPayload):
    format: MatchFormat
    region: str

    @field_validator("format", mode="before")
    @classmethod
    def _upper_format(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("region")
    @classmethod
    def _known_region(cls, value: str) -> str:
        return _check_region(value)


class DistributePayload(CommandPayload):
    code: str = Field(min_length=1, max_length=64)


class RegisterPayload(CommandPayload):
    epic_name: str = Field(min_length=3, max_length=32)
    region: str

    @field_validator("epic_name")
    @classmethod
    def _valid_epic_name(cls, value: str) -> str:
        if not EPIC_NAME_PATTERN.match(value):
            raise ValueError(
                "Epic name may only contain letters, numbers, spaces, "
                "dots, underscores and dashes"
            )
        return value

    @field_validator("region")
    @classmethod
    def _known_region(cls, value: str) -> str:
        return _check_region(value)


class UnregisterPayload(CommandPayload):
    confirm: bool = False


class PingPayload(CommandPayload):
    region: Optional[str] = None

    @field_validator("region")
    @classmethod
    def _known_region(cls, value: Optional[str]) -> Optional[str]:
        return _check_region(value) if value is not None else None


class LeaderboardPayload(CommandPayload):
    region: Optional[str] = None
    limit: int = Field(default=10, ge=1, le=50)

    @field_validator("region")
    @classmethod
    def _known_region(cls, value: Optional[str]) -> Optional[str]:
        return _check_region(value) if value is not None else None
