"""Single-slot command dispatch table."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import ErrorCode, Result
from ..logs import logger
from ..utils import schedule_if_awaitable
from .extractor import CommandExtractor

CommandHandler = Callable[[str, list[str], str], object]


@dataclass(slots=True)
class CommandRecord:
    name: str
    handler: CommandHandler | None = None

    @property
    def bound(self) -> bool:
        return self.handler is not None


class CommandDispatcher:
    """Maps command names to exactly one handler each.

    Handlers are called as ``handler(command, options, sender)``. Names are
    case sensitive. Registering an existing name replaces the handler on the
    existing record instead of creating a new one.
    """

    def __init__(self, extractor: CommandExtractor | None = None) -> None:
        self.extractor = extractor if extractor is not None else CommandExtractor()
        self._records: dict[str, CommandRecord] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def names(self) -> list[str]:
        return list(self._records)

    def get(self, name: str) -> CommandRecord | None:
        return self._records.get(name)

    def register(self, name: str, handler: CommandHandler | None) -> Result:
        if not name:
            logger.log_event("command", "invalid_name", level=logging.WARNING)
            return Result.failure(
                ErrorCode.INVALID_COMMAND_NAME, "Command type string is invalid"
            )

        record = self._records.get(name)
        if record is not None:
            record.handler = handler
            logger.log_event("command", "overwritten", command=name)
            return Result.success(
                f"{name} command registered. It overwrote a previous "
                "registration of the same type"
            )

        self._records[name] = CommandRecord(name=name, handler=handler)
        logger.log_event("command", "registered", command=name)
        return Result.success(f"{name} command registered")

    def unregister(self, name: str) -> Result:
        if not name:
            logger.log_event("command", "invalid_name", level=logging.WARNING)
            return Result.failure(
                ErrorCode.INVALID_COMMAND_NAME, "Command type string is invalid"
            )
        if self._records.pop(name, None) is None:
            logger.log_event(
                "command", "not_registered", level=logging.WARNING, command=name
            )
            return Result.failure(
                ErrorCode.NOT_REGISTERED, "No command of this type was registered"
            )
        logger.log_event("command", "unregistered", command=name)
        return Result.success(f"{name} unregistered")

    def on_message_received(self, content: str, sender: str) -> None:
        """Invoke the handler registered for the command in ``content``, if any."""
        command = self.extractor.get_command(content)
        if not command:
            return
        record = self._records.get(command)
        if record is None:
            return
        options = self.extractor.get_options(content)
        handler = record.handler
        if handler is None:
            logger.log_event("command", "unbound", level=logging.DEBUG, command=command)
            return

        logger.log_event(
            "command",
            "dispatch",
            level=logging.DEBUG,
            command=command,
            options=options,
            sender=sender,
        )

        def _log_failure(error: BaseException) -> None:
            logger.log_event(
                "command",
                "handler_error",
                level=logging.ERROR,
                command=command,
                error=str(error),
                error_type=type(error).__name__,
            )

        try:
            result = handler(command, options, sender)
        except Exception as e:  # noqa: BLE001
            _log_failure(e)
            return
        if not schedule_if_awaitable(result, on_error=_log_failure):
            logger.log_event(
                "command", "not_awaited", level=logging.WARNING, command=command
            )
