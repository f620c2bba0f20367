"""Shared pieces of a library scan: the report and file statistics."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

__all__ = ["ScanReport", "file_stats"]


@dataclass
class ScanReport:
    """Outcome of scanning one library."""

    added: int = 0
    updated: int = 0
    removed: int = 0
    enriched: int = 0
    errors: list[str] = field(default_factory=list)
    duration_ms: int = 0


def file_stats(path: str | os.PathLike[str]) -> tuple[int, datetime]:
    """Return a file's size in bytes and its modification time in UTC."""
    info = os.stat(path)
    try:
        seconds, nanos = divmod(info.st_mtime_ns, 1_000_000_000)
        mtime = datetime.fromtimestamp(seconds, timezone.utc).replace(
            microsecond=nanos // 1000
        )
    except (OverflowError, OSError, ValueError):
        mtime = datetime.now(timezone.utc)
    return info.st_size, mtime