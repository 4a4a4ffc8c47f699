"""
Configuration constants for the TwitchPlay chat client

This module contains all configurable constants used throughout the package.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same contract as ``_get_env_int`` for floating point values.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Chat server endpoint (plaintext IRC)
IRC_HOST = _get_env_str("TWITCHPLAY_IRC_HOST", "irc.chat.twitch.tv")
IRC_PORT = _get_env_int("TWITCHPLAY_IRC_PORT", 6667)  # Standard IRC port

# Socket tuning
RECEIVE_BUFFER_SIZE = _get_env_int(
    "RECEIVE_BUFFER_SIZE", 2 * 1024 * 1024
)  # SO_RCVBUF hint (2 MiB), also the cap on a pending unterminated line
RECV_CHUNK_SIZE = _get_env_int(
    "RECV_CHUNK_SIZE", 64 * 1024
)  # Max bytes read by one poll; partial lines carry over to the next
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 10.0
)  # Upper bound for the blocking connect; <= 0 disables the bound

# Receive loop
POLL_INTERVAL_SECONDS = _get_env_float(
    "POLL_INTERVAL_SECONDS", 0.05
)  # Delay between two poll() invocations of the default timer

# Keep-alive exchange (exact literals)
KEEPALIVE_PROBE = "PING :tmi.twitch.tv"
KEEPALIVE_REPLY = "PONG :tmi.twitch.tv"

# Outbound line terminator
LINE_TERMINATOR = "\n"

# Command encapsulation defaults
DEFAULT_COMMAND_CHAR = _get_env_str("DEFAULT_COMMAND_CHAR", "!")
DEFAULT_OPTIONS_CHAR = _get_env_str("DEFAULT_OPTIONS_CHAR", "#")
OPTIONS_SEPARATOR = ","
