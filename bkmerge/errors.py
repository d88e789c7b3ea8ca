"""
Exceptions raised by bkmerge.
"""
from typing import Sequence


class BkmergeError(Exception):
    """Base class for all bkmerge errors."""


class InvalidFileTypeError(BkmergeError):
    """A file was offered whose name does not carry an accepted extension."""

    def __init__(self, name: str, accepted: Sequence[str]):
        self.name = name
        self.accepted = tuple(accepted)
        super().__init__(
            f"Invalid file type: {name!r} (expected {', '.join(self.accepted)})"
        )


class MalformedDocumentError(BkmergeError):
    """The markup could not be parsed as a bookmark document (strict mode only)."""

    def __init__(self, reason: str, source: str = None):
        self.reason = reason
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Malformed document{where}: {reason}")


class EmptyMergeError(BkmergeError):
    """A merge was requested before any bookmarks were ingested."""

    def __init__(self):
        super().__init__("Nothing to merge: no bookmarks have been ingested")
