"""Command and option extraction from free-form chat text.

A command is written ``<command_char>name<command_char>`` and its options
``<options_char>opt1,opt2<options_char>``, e.g. ``!move!#left,2#``.
"""

from __future__ import annotations

from ..constants import DEFAULT_COMMAND_CHAR, DEFAULT_OPTIONS_CHAR, OPTIONS_SEPARATOR


def extract_delimited(text: str, delimiter: str) -> str:
    """Return the text between the first two occurrences of ``delimiter``.

    Unterminated spans yield ``""``, as do empty inputs.
    """
    if not text or not delimiter:
        return ""
    start = text.find(delimiter)
    if start == -1:
        return ""
    begin = start + len(delimiter)
    if begin == len(text):
        return ""
    end = text.find(delimiter, begin)
    if end == -1:
        return ""
    return text[begin:end]


class CommandExtractor:
    """Reads command names and options using the configured markers."""

    def __init__(
        self,
        command_char: str = DEFAULT_COMMAND_CHAR,
        options_char: str = DEFAULT_OPTIONS_CHAR,
    ) -> None:
        self.command_char = command_char
        self.options_char = options_char

    def get_command(self, message: str) -> str:
        """First command of ``message``, ``""`` when there is none.

        Besides ``!name!``, a name directly followed by a closed option span
        (``!name#a,b#``) is accepted; ``!name#a`` is not.
        """
        command = extract_delimited(message, self.command_char)
        if command:
            return command
        return self._command_before_options(message)

    def _command_before_options(self, message: str) -> str:
        start = message.find(self.command_char)
        if start == -1:
            return ""
        begin = start + len(self.command_char)
        end = message.find(self.options_char, begin)
        if end == -1:
            return ""
        if message.find(self.options_char, end + len(self.options_char)) == -1:
            return ""
        name = message[begin:end]
        if not name or any(ch.isspace() for ch in name):
            return ""
        return name

    def get_options(self, message: str) -> list[str]:
        span = extract_delimited(message, self.options_char)
        return [option for option in span.split(OPTIONS_SEPARATOR) if option]
