"""Turn raw socket reads into protocol lines."""

from __future__ import annotations

import codecs


def split_lines(text: str) -> list[str]:
    """Split a complete chunk into its non-empty lines.

    Any line boundary counts (``\\n``, ``\\r\\n``, ``\\r``); a final line
    without terminator is still a line.
    """
    return [line for line in text.splitlines() if line]


class LineFramer:
    """Incremental decoder keeping partial lines between reads.

    One ``recv`` may end in the middle of a line or even in the middle of a
    multi-byte character; both are held back until the next ``feed``.
    A partial line longer than ``max_pending`` characters is dropped, and so
    is the rest of it up to the next line break.
    """

    def __init__(self, encoding: str = "utf-8", max_pending: int | None = None) -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""
        self._discarding = False
        self.max_pending = max_pending

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, data: bytes) -> list[str]:
        text = self._decoder.decode(data)
        if self._discarding:
            if "\n" not in text:
                return []
            text = text.split("\n", 1)[1]
            self._discarding = False
        self._buffer += text
        lines: list[str] = []
        if "\n" in self._buffer:
            *complete, self._buffer = self._buffer.split("\n")
            lines = [line.rstrip("\r") for line in complete if line.rstrip("\r")]
        if self.max_pending is not None and len(self._buffer) > self.max_pending:
            self._buffer = ""
            self._discarding = True
        return lines

    def reset(self) -> None:
        self._decoder.reset()
        self._buffer = ""
        self._discarding = False
