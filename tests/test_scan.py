import os
from dataclasses import asdict
from datetime import datetime, timezone

import pytest

from mythos.scan import ScanReport, file_stats


def test_report_defaults_are_empty():
    report = ScanReport()
    assert asdict(report) == {
        "added": 0, "updated": 0, "removed": 0,
        "enriched": 0, "errors": [], "duration_ms": 0,
    }


def test_reports_do_not_share_error_lists():
    first, second = ScanReport(), ScanReport()
    first.errors.append("unrecognized: a.mkv")
    assert second.errors == []


def test_file_stats_size_matches_content(tmp_path):
    path = tmp_path / "movie.mkv"
    data = b"some video bytes"
    path.write_bytes(data)
    size, _ = file_stats(path)
    assert size == len(data)


def test_file_stats_mtime_is_utc(tmp_path):
    path = tmp_path / "movie.mkv"
    path.write_bytes(b"")
    stamp = 1_600_000_000
    os.utime(path, (stamp, stamp))
    _, mtime = file_stats(path)
    assert mtime == datetime.fromtimestamp(stamp, timezone.utc)
    assert mtime.tzinfo == timezone.utc


def test_file_stats_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_stats(tmp_path / "missing.mkv")