# polyfield_track/errors.py
from __future__ import annotations

from pathlib import Path


class MalformedTime(ValueError):
    """A time field could not be turned into elapsed seconds."""


class InsufficientFields(ValueError):
    """A competitor row is shorter than its format requires."""

    def __init__(self, found: int, expected: int):
        self.found = found
        self.expected = expected
        super().__init__(f"not enough fields (found {found}, expected at least {expected})")


class ResultParseError(ValueError):
    """
    Raised when a whole result file cannot be turned into a LifData.
    Carries file + reason so log lines say which export was rejected and why.
    """
    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = str(reason)
        super().__init__(f"{self.path.name} | {self.reason}")


class NoValidRecords(ResultParseError):
    pass


class UnsupportedFormat(ResultParseError):
    pass


class ScanError(RuntimeError):
    pass


class DirectoryUnset(ScanError):
    def __init__(self):
        super().__init__("no directory selected")


class DirectoryUnreadable(ScanError):
    def __init__(self, directory: Path, cause: OSError):
        self.directory = Path(directory)
        self.cause = cause
        super().__init__(f"cannot list {self.directory}: {cause}")
