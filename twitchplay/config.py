"""Credential model and environment loading."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    """Login data for the chat server.

    Attributes:
        token: OAuth token, always carrying the ``oauth:`` prefix once validated.
        username: Login name (lower-cased).
        channel: Channel joined after login, without ``#``; ``None`` when the
            client should not join any channel.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1)
    username: str = Field(min_length=1)
    channel: str | None = None

    @field_validator("token", mode="before")
    @classmethod
    def normalize_token(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if v and not v.startswith("oauth:"):
            v = f"oauth:{v}"
        return v

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("channel", mode="before")
    @classmethod
    def normalize_channel(cls, v: Any) -> Any:
        """Strip whitespace and a leading '#'; empty means no channel."""
        if v is None:
            return None
        if not isinstance(v, str):
            return v
        stripped = v.strip().lstrip("#").lower()
        return stripped or None


def load_credentials_from_env() -> Credentials:
    """Build credentials from ``TWITCH_TOKEN``, ``TWITCH_USERNAME`` and ``TWITCH_CHANNEL``.

    Raises:
        pydantic.ValidationError: token or username missing.
    """
    return Credentials(
        token=os.environ.get("TWITCH_TOKEN", ""),
        username=os.environ.get("TWITCH_USERNAME", ""),
        channel=os.environ.get("TWITCH_CHANNEL"),
    )
