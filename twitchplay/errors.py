"""Operation results and the error taxonomy of the chat client.

Public operations never raise. They return a :class:`Result` carrying a
success flag, a human readable message and, on failure, an :class:`ErrorCode`.

Codes:
  HOST_RESOLUTION_FAILED  – DNS lookup of the chat server failed.
  SOCKET_CREATION_FAILED  – The OS refused to create a stream socket.
  CONNECT_FAILED          – The TCP connect attempt failed or timed out.
  NOT_CONNECTED           – Operation requires an open connection.
  USER_INFO_MISSING       – Credentials were never set.
  INVALID_USER_INFO       – Credentials failed validation.
  SEND_FAILED             – At least one outbound line could not be written.
  INVALID_COMMAND_NAME    – Empty command name.
  NOT_REGISTERED          – No handler registered under that command name.
  INVALID_ENCAPSULATION   – Empty command or options marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    HOST_RESOLUTION_FAILED = "host_resolution_failed"
    SOCKET_CREATION_FAILED = "socket_creation_failed"
    CONNECT_FAILED = "connect_failed"
    NOT_CONNECTED = "not_connected"
    USER_INFO_MISSING = "user_info_missing"
    INVALID_USER_INFO = "invalid_user_info"
    SEND_FAILED = "send_failed"
    INVALID_COMMAND_NAME = "invalid_command_name"
    NOT_REGISTERED = "not_registered"
    INVALID_ENCAPSULATION = "invalid_encapsulation"


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of a client operation.

    Attributes:
        ok: Whether the operation succeeded.
        message: Human readable outcome, suitable for display.
        error: Failure category, ``None`` on success.
    """

    ok: bool
    message: str = ""
    error: ErrorCode | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, message: str = "") -> Result:
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, error: ErrorCode, message: str) -> Result:
        return cls(ok=False, message=message, error=error)


__all__ = ["ErrorCode", "Result"]
