"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from pathlib import Path

import pytest

from maildir_archiver.models import MessageDescriptor
from maildir_archiver.policy import RetentionPolicy

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def days_ago(days: int) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture
def now() -> float:
    return NOW.timestamp()


@pytest.fixture
def policy() -> RetentionPolicy:
    """30 day cutoff, seen messages only."""
    return RetentionPolicy.from_age(30, now=NOW.timestamp())


@pytest.fixture
def make_descriptor():
    def _make(days: int = 45, seen: bool = True, flagged: bool = False, identity: str = "msg_001") -> MessageDescriptor:
        return MessageDescriptor(
            subject="Weekly report",
            date_header=format_datetime(days_ago(days)),
            resolved_timestamp=int(days_ago(days).timestamp()),
            identity=identity,
            content_location=Path("/nonexistent") / identity,
            seen=seen,
            flagged=flagged,
        )

    return _make


@pytest.fixture
def maildir(tmp_path: Path) -> Path:
    """An empty Maildir with cur/new/tmp."""
    root = tmp_path / "Maildir"
    for sub in ("cur", "new", "tmp"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def add_message(maildir: Path):
    """Drop a message into the Maildir and return its path.

    ``date`` may be a number of days before NOW, a raw header string, or None
    to leave the Date header out.
    """

    def _add(
        identity: str,
        date: int | str | None = 45,
        subject: str | None = "Old news",
        flags: str = "S",
        subdir: str = "cur",
        body: str = "Hello there.\n",
    ) -> Path:
        headers = ["From: Alice <alice@example.com>", "To: bob@example.com"]
        if subject is not None:
            headers.append(f"Subject: {subject}")
        if isinstance(date, int):
            headers.append(f"Date: {format_datetime(days_ago(date))}")
        elif date is not None:
            headers.append(f"Date: {date}")
        headers.append("Status: O")
        name = identity if subdir == "new" else f"{identity}:2,{flags}"
        path = maildir / subdir / name
        path.write_bytes(("\n".join(headers) + "\n\n" + body).encode())
        return path

    return _add
