"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTED = auto()
    AUTHENTICATED = auto()


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    content: str
    sender: str = ""  # empty for server-originated lines

    @property
    def from_user(self) -> bool:
        return bool(self.sender)
