"""Data models for Maildir Archiver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MessageHandle:
    """A message file found while traversing the store."""

    identity: str  # Maildir unique name, used for deletion
    path: Path
    subdir: str  # "cur" or "new"
    flags: str = ""  # Maildir info flags, e.g. "FS"


@dataclass(frozen=True)
class MessageDescriptor:
    """Resolved metadata for a single message."""

    subject: str
    date_header: str  # raw Date header text, display only
    resolved_timestamp: int  # seconds since epoch
    identity: str
    content_location: Path
    seen: bool = False
    flagged: bool = False

    def __str__(self) -> str:
        return f"{self.identity}/{self.date_header}/{self.subject}"


@dataclass
class RunCounters:
    """Tallies for a single retirement run."""

    archived: int = 0
    kept: int = 0
    parse_errors: int = 0
    move_errors: int = 0
    previewed: int = 0  # dry run only: would have been retired
