"""TwitchPlay: Twitch chat client with command dispatch."""

from .commands import CommandDispatcher, CommandExtractor, extract_delimited  # noqa: F401
from .config import Credentials  # noqa: F401
from .errors import ErrorCode, Result  # noqa: F401
from .irc import ConnectionState, ParsedMessage, TwitchIRCClient, parse_message  # noqa: F401
from .play import TwitchPlayClient  # noqa: F401

__version__ = "1.0.0"

__all__ = [
    "CommandDispatcher",
    "CommandExtractor",
    "ConnectionState",
    "Credentials",
    "ErrorCode",
    "ParsedMessage",
    "Result",
    "TwitchIRCClient",
    "TwitchPlayClient",
    "extract_delimited",
    "parse_message",
]
