"""Protocol line parsing.

Basic chat line form::

    :nick!nick@nick.tmi.twitch.tv PRIVMSG #channel :message here

The part before the first ``:`` after the prefix marker is routing metadata,
everything after it is message content (which may itself contain ``:``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..constants import KEEPALIVE_PROBE
from .framer import split_lines
from .models import ParsedMessage

KeepaliveCallback = Callable[[], object]


def is_keepalive(line: str) -> bool:
    return line == KEEPALIVE_PROBE


def _strip_tags(line: str) -> str:
    # IRCv3 tag values may contain ':' (emote ranges), drop them first
    if line.startswith("@"):
        _, _, line = line.partition(" ")
    return line


def extract_sender(meta: str) -> str:
    """Return the nick of a PRIVMSG metadata segment, ``""`` otherwise."""
    tokens = meta.split()
    if len(tokens) < 2 or tokens[1] != "PRIVMSG":
        return ""
    nick, bang, _ = tokens[0].partition("!")
    return nick if bang else ""


def parse_line(line: str, *, filter_users_only: bool = False) -> ParsedMessage | None:
    """Parse one non keep-alive line; ``None`` when it carries no content."""
    line = _strip_tags(line)
    if line.startswith(":"):
        line = line[1:]
    meta, sep, content = line.partition(":")
    sender = extract_sender(meta)
    if filter_users_only and not sender:
        return None
    # Bare server events (JOIN etc.) have no ':'-delimited body
    if not sep or not content:
        return None
    return ParsedMessage(content=content, sender=sender)


def parse_lines(
    lines: Iterable[str],
    *,
    filter_users_only: bool = False,
    on_keepalive: KeepaliveCallback | None = None,
) -> list[ParsedMessage]:
    """Parse framed lines in order, answering keep-alives as they appear."""
    messages: list[ParsedMessage] = []
    for line in lines:
        if is_keepalive(line):
            if on_keepalive is not None:
                on_keepalive()
            continue
        parsed = parse_line(line, filter_users_only=filter_users_only)
        if parsed is not None:
            messages.append(parsed)
    return messages


def parse_message(
    text: str,
    *,
    filter_users_only: bool = False,
    on_keepalive: KeepaliveCallback | None = None,
) -> list[ParsedMessage]:
    """Parse a whole received chunk, which may hold any number of lines."""
    return parse_lines(
        split_lines(text),
        filter_users_only=filter_users_only,
        on_keepalive=on_keepalive,
    )
