"""Find video files under a library root.

Only a small set of container extensions counts as video, so sidecars
such as ``.nfo``, ``.srt`` or thumbnails are never picked up. Hidden
files and directories (names starting with ``.``) are skipped.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path, PurePath

__all__ = ["VIDEO_EXTENSIONS", "video_files", "is_video"]

VIDEO_EXTENSIONS: tuple[str, ...] = (
    "mkv", "mp4", "m4v", "avi", "mov", "webm", "ts", "m2ts", "wmv",
)


def _walk(directory: Path) -> Iterator[Path]:
    try:
        with os.scandir(directory) as entries:
            children = sorted(entries, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in children:
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk(Path(entry.path))
            elif entry.is_file(follow_symlinks=False):
                yield Path(entry.path)
        except OSError:
            continue


def video_files(root: str | os.PathLike[str]) -> list[Path]:
    """Return every video file below ``root``, skipping hidden entries."""
    return [path for path in _walk(Path(root)) if is_video(path)]


def is_video(path: str | os.PathLike[str]) -> bool:
    """True when the path's extension is a known video container."""
    suffix = PurePath(path).suffix
    if not suffix:
        return False
    return suffix[1:].lower() in VIDEO_EXTENSIONS