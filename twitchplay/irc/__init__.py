"""IRC subsystem package.

Contains the socket client, line framing, line parsing and the poll timer
for the Twitch chat protocol.
"""

from .client import TwitchIRCClient  # noqa: F401
from .framer import LineFramer, split_lines  # noqa: F401
from .models import ConnectionState, ParsedMessage  # noqa: F401
from .parser import parse_line, parse_lines, parse_message  # noqa: F401
from .timer import AsyncioPollTimer, PollTimer  # noqa: F401

__all__ = [
    "AsyncioPollTimer",
    "ConnectionState",
    "LineFramer",
    "ParsedMessage",
    "PollTimer",
    "TwitchIRCClient",
    "parse_line",
    "parse_lines",
    "parse_message",
    "split_lines",
]
