"""Maildir access - listing messages and deleting them by identity."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .constants import CUR_SUBDIR, FLAG_FLAGGED, FLAG_SEEN, INFO_PREFIX, INFO_SEPARATOR, NEW_SUBDIR
from .errors import StoreError
from .models import MessageHandle


def parse_message_name(name: str) -> tuple[str, str]:
    """Split a Maildir file name into (unique name, flags).

    Handles names like:
      "1700000000.M1P2.host:2,FS" -> ("1700000000.M1P2.host", "FS")
      "1700000000.M1P2.host"      -> ("1700000000.M1P2.host", "")
    """
    identity, sep, info = name.partition(INFO_SEPARATOR)
    if sep and info.startswith(INFO_PREFIX):
        return identity, info[len(INFO_PREFIX):]
    return identity, ""


class MaildirStore:
    """A Maildir on disk: ``cur`` holds read messages, ``new`` unread ones."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        if not self.path.is_dir():
            raise StoreError(f"Maildir {self.path} does not exist")

    def _list(self, subdir: str) -> Iterator[MessageHandle]:
        directory = self.path / subdir
        if not directory.is_dir():
            return
        try:
            entries = os.scandir(directory)
        except OSError as e:
            raise StoreError(f"Cannot list {directory}: {e}") from e
        with entries:
            for entry in entries:
                # dot files are never messages (e.g. Dovecot/Courier metadata)
                if entry.name.startswith(".") or not entry.is_file():
                    continue
                identity, flags = parse_message_name(entry.name)
                yield MessageHandle(
                    identity=identity,
                    path=Path(entry.path),
                    subdir=subdir,
                    flags=flags,
                )

    def list_cur(self) -> Iterator[MessageHandle]:
        """Lazily yield handles for messages already seen by a mail client."""
        return self._list(CUR_SUBDIR)

    def list_new(self) -> Iterator[MessageHandle]:
        """Lazily yield handles for unread messages."""
        return self._list(NEW_SUBDIR)

    def is_seen(self, handle: MessageHandle) -> bool:
        return FLAG_SEEN in handle.flags

    def is_flagged(self, handle: MessageHandle) -> bool:
        return FLAG_FLAGGED in handle.flags

    def open_message(self, handle: MessageHandle):
        """Open the raw message bytes for reading."""
        return open(handle.path, "rb")

    def _find(self, identity: str) -> Path | None:
        for subdir in (CUR_SUBDIR, NEW_SUBDIR):
            directory = self.path / subdir
            if not directory.is_dir():
                continue
            with os.scandir(directory) as entries:
                for entry in entries:
                    if parse_message_name(entry.name)[0] == identity and entry.is_file():
                        return Path(entry.path)
        return None

    def delete(self, identity: str) -> None:
        """Remove the message with the given unique name from the Maildir.

        Only the subdirectories that exist are searched; the file is looked up
        again so a flag change since listing doesn't matter.
        """
        try:
            path = self._find(identity)
            if path is None:
                raise StoreError(f"No message {identity} in {self.path}")
            path.unlink()
        except OSError as e:
            raise StoreError(f"Cannot delete {identity}: {e}") from e
