"""Technical metadata from ``ffprobe``.

``ffprobe -v error -print_format json -show_format -show_streams <path>``
is run and its JSON turned into a :class:`Probe`. Any failure raises
:class:`ProbeError`; callers are expected to index the file with an
empty :class:`Probe` instead.
"""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

__all__ = ["ProbeError", "Subtitle", "Probe", "parse_probe_output", "probe"]

_IMAGE_SUBTITLE_CODECS = frozenset(
    {"hdmv_pgs_subtitle", "dvd_subtitle", "dvb_subtitle", "xsub"}
)


class ProbeError(Exception):
    """ffprobe could not be run or its output could not be read."""


@dataclass(frozen=True)
class Subtitle:
    """A subtitle stream embedded in a media file."""

    stream_index: int
    codec: str
    is_image: bool = False
    language: str | None = None
    title: str | None = None
    is_default: bool = False
    is_forced: bool = False


@dataclass(frozen=True)
class Probe:
    """Container, codec and picture details of a media file."""

    container: str | None = None
    video_codec: str | None = None
    audio_codec: str | None = None
    duration_seconds: float | None = None
    width: int | None = None
    height: int | None = None
    color_primaries: str | None = None
    color_transfer: str | None = None
    color_space: str | None = None
    subtitles: list[Subtitle] = field(default_factory=list)


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _opt_int(value: Any) -> int | None:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _parse_duration(value: Any) -> float | None:
    if not isinstance(value, str):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _subtitle(stream: dict[str, Any]) -> Subtitle | None:
    index = _opt_int(stream.get("index"))
    codec = _opt_str(stream.get("codec_name"))
    if index is None or codec is None:
        return None
    tags = _mapping(stream.get("tags"))
    disposition = _mapping(stream.get("disposition"))
    return Subtitle(
        stream_index=index,
        codec=codec,
        is_image=codec in _IMAGE_SUBTITLE_CODECS,
        language=_opt_str(tags.get("language")),
        title=_opt_str(tags.get("title")),
        is_default=bool(disposition.get("default", 0)),
        is_forced=bool(disposition.get("forced", 0)),
    )


def parse_probe_output(text: str) -> Probe:
    """Turn ffprobe's JSON output into a :class:`Probe`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ProbeError(f"ffprobe returned malformed JSON: {err}") from err
    if not isinstance(data, dict):
        raise ProbeError("ffprobe returned malformed JSON: expected an object")

    fmt = _mapping(data.get("format"))
    # format_name lists every matching profile ("mov,mp4,m4a,..."); keep the first.
    format_name = _opt_str(fmt.get("format_name"))
    container = format_name.split(",")[0].strip() if format_name is not None else None

    raw_streams = data.get("streams") or []
    streams = [s for s in raw_streams if isinstance(s, dict)] if isinstance(raw_streams, list) else []

    def first_of(kind: str) -> dict[str, Any]:
        return next((s for s in streams if s.get("codec_type") == kind), {})

    video = first_of("video")
    audio = first_of("audio")
    subtitles = [
        sub
        for sub in (_subtitle(s) for s in streams if s.get("codec_type") == "subtitle")
        if sub is not None
    ]

    return Probe(
        container=container,
        video_codec=_opt_str(video.get("codec_name")),
        audio_codec=_opt_str(audio.get("codec_name")),
        duration_seconds=_parse_duration(fmt.get("duration")),
        width=_opt_int(video.get("width")),
        height=_opt_int(video.get("height")),
        color_primaries=_opt_str(video.get("color_primaries")),
        color_transfer=_opt_str(video.get("color_transfer")),
        color_space=_opt_str(video.get("color_space")),
        subtitles=subtitles,
    )


def probe(path: str | os.PathLike[str], ffprobe: str = "ffprobe") -> Probe:
    """Run ffprobe on ``path`` and return what it reports."""
    command = [
        ffprobe, "-v", "error", "-print_format", "json",
        "-show_format", "-show_streams", os.fspath(path),
    ]
    try:
        result = subprocess.run(command, capture_output=True, check=False)
    except OSError as err:
        raise ProbeError(f"ffprobe failed to start: {err}") from err
    if result.returncode != 0:
        raise ProbeError(f"ffprobe exited with status {result.returncode}")
    try:
        text = result.stdout.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ProbeError("ffprobe returned non-utf-8 output") from err
    return parse_probe_output(text)