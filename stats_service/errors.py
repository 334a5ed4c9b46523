"""
Errors raised while generating the stats page.
"""

from pathlib import Path
from typing import Union


class StatsPageError(Exception):
    """Base class for stats page generation failures."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class DataUnavailable(StatsPageError):
    """The access log is missing, unreadable or malformed."""


class OutputWriteFailure(StatsPageError):
    """The stats page could not be written to its destination."""
