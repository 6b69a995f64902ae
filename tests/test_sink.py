"""Tests for archive sinks."""

import gzip

import pytest

from maildir_archiver.errors import SinkError
from maildir_archiver.sink import AppendSink, DiscardSink, check_archive_target, open_sink


def test_open_sink_remove_discards(tmp_path):
    sink = open_sink(None, remove=True)
    assert isinstance(sink, DiscardSink)
    sink.write(b"dropped")
    sink.close()
    assert list(tmp_path.iterdir()) == []


def test_append_never_truncates(tmp_path):
    target = tmp_path / "archive.mbox"
    target.write_bytes(b"existing\n")

    with open_sink(target) as sink:
        sink.write(b"first\n")
        sink.write(b"second\n")

    assert target.read_bytes() == b"existing\nfirst\nsecond\n"


def test_write_reaches_file_before_close(tmp_path):
    target = tmp_path / "archive.mbox"
    sink = AppendSink(target)
    sink.write(b"message\n")
    assert target.read_bytes() == b"message\n"
    sink.close()


def test_gzip_members_accumulate(tmp_path):
    target = tmp_path / "archive.mbox.gz"

    with AppendSink(target) as sink:
        assert sink.compressed
        sink.write(b"run one\n")
    with AppendSink(target) as sink:
        sink.write(b"run two\n")

    with gzip.open(target, "rb") as f:
        assert f.read() == b"run one\nrun two\n"


def test_close_is_idempotent(tmp_path):
    sink = AppendSink(tmp_path / "a.gz")
    sink.close()
    sink.close()


def test_write_after_close_raises(tmp_path):
    sink = AppendSink(tmp_path / "a.mbox")
    sink.close()
    with pytest.raises(SinkError, match="already closed"):
        sink.write(b"late")


def test_unopenable_target(tmp_path):
    with pytest.raises(SinkError, match="Failed to write"):
        AppendSink(tmp_path / "missing-dir" / "archive.mbox")


def test_open_sink_requires_target():
    with pytest.raises(SinkError):
        open_sink(None, remove=False)


def test_check_archive_target_does_not_create(tmp_path):
    target = tmp_path / "archive.mbox"
    check_archive_target(target)
    assert not target.exists()


def test_check_archive_target_rejects_directory(tmp_path):
    with pytest.raises(SinkError):
        check_archive_target(tmp_path)


def test_check_archive_target_rejects_missing_parent(tmp_path):
    with pytest.raises(SinkError, match="not writable"):
        check_archive_target(tmp_path / "missing-dir" / "archive.mbox")
