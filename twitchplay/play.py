"""Chat client that turns chat messages into command callbacks."""

from __future__ import annotations

import logging
from typing import Any

from .commands import CommandDispatcher, CommandExtractor, CommandHandler
from .errors import ErrorCode, Result
from .irc import TwitchIRCClient
from .logs import logger


class TwitchPlayClient(TwitchIRCClient):
    """``TwitchIRCClient`` with a command dispatch table attached.

    Every received message still reaches the subscribers; in addition the
    dispatcher looks for ``!command!`` / ``#opt1,opt2#`` markers and calls the
    handler registered for that command. Only one handler per command.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.dispatcher = CommandDispatcher(CommandExtractor())
        self.subscribe(self.dispatcher.on_message_received)

    @property
    def command_char(self) -> str:
        return self.dispatcher.extractor.command_char

    @property
    def options_char(self) -> str:
        return self.dispatcher.extractor.options_char

    def setup_encapsulation_chars(self, command_char: str, options_char: str) -> Result:
        if not command_char or not options_char:
            logger.log_event("command", "encapsulation_invalid", level=logging.WARNING)
            return Result.failure(
                ErrorCode.INVALID_ENCAPSULATION,
                "Encapsulation characters must not be empty",
            )
        self.dispatcher.extractor.command_char = command_char
        self.dispatcher.extractor.options_char = options_char
        logger.log_event(
            "command",
            "encapsulation_set",
            level=logging.DEBUG,
            command_char=command_char,
            options_char=options_char,
        )
        return Result.success("Encapsulation characters updated")

    def register_command(self, name: str, handler: CommandHandler | None) -> Result:
        return self.dispatcher.register(name, handler)

    def unregister_command(self, name: str) -> Result:
        return self.dispatcher.unregister(name)
