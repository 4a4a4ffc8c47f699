"""Chat command extraction and dispatch."""

from .dispatcher import CommandDispatcher, CommandHandler, CommandRecord  # noqa: F401
from .extractor import CommandExtractor, extract_delimited  # noqa: F401

__all__ = [
    "CommandDispatcher",
    "CommandExtractor",
    "CommandHandler",
    "CommandRecord",
    "extract_delimited",
]
