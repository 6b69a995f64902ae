"""Archive sinks - where the bytes of retired messages go."""

from __future__ import annotations

import gzip
import os
from pathlib import Path

from .constants import GZIP_COMPRESSLEVEL, GZIP_SUFFIX
from .errors import SinkError


class ArchiveSink:
    """Destination for retired messages, shared by a whole run."""

    def write(self, data: bytes) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Finalize the sink. Safe to call more than once."""

    # --- context manager ---

    def __enter__(self) -> ArchiveSink:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()


class DiscardSink(ArchiveSink):
    """Accepts and drops everything, used when removing instead of archiving."""

    def write(self, data: bytes) -> None:
        return None


class AppendSink(ArchiveSink):
    """Append messages to a single file, gzip-compressed for ``.gz`` targets.

    Existing content is never truncated. Each run that writes to a ``.gz``
    target adds one gzip member; the member trailer is written on close.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.compressed = self.path.name.endswith(GZIP_SUFFIX)
        try:
            self._raw = open(self.path, "ab")
        except OSError as e:
            raise SinkError(f"Failed to write {self.path}: {e}") from e
        self._stream = self._raw
        if self.compressed:
            try:
                self._stream = gzip.GzipFile(
                    filename="",
                    mode="wb",
                    fileobj=self._raw,
                    compresslevel=GZIP_COMPRESSLEVEL,
                )
            except OSError as e:
                self._raw.close()
                raise SinkError(f"Failed to write {self.path}: {e}") from e
        self._closed = False

    def write(self, data: bytes) -> None:
        """Write ``data`` and push it through to the OS before returning."""
        if self._closed:
            raise SinkError(f"Archive {self.path} is already closed")
        try:
            self._stream.write(data)
            self._stream.flush()
            if self._stream is not self._raw:
                self._raw.flush()
        except OSError as e:
            raise SinkError(f"Failed to output email to {self.path}: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._stream is not self._raw:
                self._stream.close()
        except OSError as e:
            raise SinkError(f"Failed to finalize {self.path}: {e}") from e
        finally:
            self._raw.close()


def check_archive_target(path: Path | str) -> None:
    """Verify an archive could be opened for appending, without touching it."""
    path = Path(path)
    if path.exists():
        if path.is_dir() or not os.access(path, os.W_OK):
            raise SinkError(f"Failed to write {path}: not a writable file")
        return
    parent = path.parent
    if not parent.is_dir() or not os.access(parent, os.W_OK | os.X_OK):
        raise SinkError(f"Failed to write {path}: directory {parent} is not writable")


def open_sink(archive: Path | str | None, remove: bool = False) -> ArchiveSink:
    """Return the sink for a run: discard when removing, append otherwise."""
    if remove:
        return DiscardSink()
    if archive is None:
        raise SinkError("No archive target given")
    return AppendSink(archive)
