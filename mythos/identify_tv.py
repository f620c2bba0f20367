"""Filename-based TV episode identification.

Patterns are tried in order, and the first match wins:

1. ``SxxEyy`` in the filename, tolerating ``S02 E01``, ``S01.E01``,
   ``S01EP01`` and the multi-episode ``S01E01E02`` form (the first
   episode wins).
2. ``NxMM`` in the filename; the episode needs at least two digits.
3. A season directory (``S01``, ``Season 01``, ``Specials``) as parent
   and a filename starting with ``E<digits>``.

The series title comes from the nearest parent directory that is not a
season directory, a junk sidecar directory, or a season-bearing
directory such as ``Show S02``.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import PurePath

from mythos.identify import clean

__all__ = ["TvIdentity", "identify_tv", "strip_trailing_season_suffix"]


@dataclass(frozen=True)
class TvIdentity:
    """Series, season and episode parsed from an episode's path."""

    series: str
    year: int | None
    season_number: int
    episode_number: int
    episode_title: str | None = None


@dataclass(frozen=True)
class _SeasonEpisode:
    season_number: int
    episode_number: int
    prefix: str
    suffix: str


_DIR_YEAR_RE = re.compile(
    r"^(?P<name>.+?)[\s._\-]*\(?(?P<year>19\d{2}|20\d{2})\)?\s*\Z"
)
_CLEANED_YEAR_RE = re.compile(
    r"^(?P<name>.+?)\s+\(?(?P<year>19\d{2}|20\d{2})\)?\s*\Z"
)
# No trailing word boundary, so S01E01E02 and S02E10WEBRip still match.
_SXXEYY_RE = re.compile(r"\bS(?P<s>\d{1,2})[\s._\-]*EP?(?P<e>\d{1,3})", re.IGNORECASE)
# The episode needs two or more digits so that 1x3 is not taken for one.
_NXMM_RE = re.compile(r"\b(?P<s>\d{1,2})x(?P<e>\d{2,3})\b")
_LEADING_E_RE = re.compile(r"^\s*E(?P<e>\d{1,3})\b", re.IGNORECASE)
_SEASON_DIR_NUMBER_RE = re.compile(
    r"^\s*(?:season\s*(?P<n>\d{1,3})|s(?P<n2>\d{1,2}))\s*\Z", re.IGNORECASE
)
_SEASON_DIR_RE = re.compile(r"^\s*(season\s*\d+|s\d{1,2})\s*\Z", re.IGNORECASE)
_JUNK_DIR_RE = re.compile(
    r"^\s*(samples?|extras?|bonus(?:es)?|featurettes?|cover|menu|trailers?|intros?"
    r"|behind[\s._\-]*the[\s._\-]*scenes|bts)\s*\Z",
    re.IGNORECASE,
)
_SEASON_SUFFIX_RE = re.compile(r"^(?P<base>.+?)[\s._\-]+s\d{1,2}\b.*\Z", re.IGNORECASE)
_QUALITY_RE = re.compile(
    r"\b(?:2160p|1080p|720p|480p|web[-._]?dl|webrip|bluray|hdtv|dvdrip|remux|x26[45]"
    r"|h\.?26[45]|hevc|avc|aac|ac3|dts|dts[-._]?hd|flac|dd[\d.]+|ddp[\d.]+|repack"
    r"|proper|internal|hdr|10bit|ntsc|pal|multi)\b",
    re.IGNORECASE,
)

_TITLE_LEAD_CHARS = " ._-\u2014\u2013"


def identify_tv(path: str | os.PathLike[str]) -> TvIdentity | None:
    """Identify a TV episode from its path, or return None if nothing fits."""
    pure = PurePath(path)
    if not pure.name:
        return None
    stem = pure.stem

    found = _parse_season_episode(stem)
    if found is not None:
        series, year = _series_and_year(pure, found.prefix)
        if not series:
            return None
        return TvIdentity(
            series=series,
            year=year,
            season_number=found.season_number,
            episode_number=found.episode_number,
            episode_title=_extract_episode_title(found.suffix),
        )

    from_parent = _parse_from_parent_season(pure, stem)
    if from_parent is not None:
        season_number, episode_number, suffix = from_parent
        name = _walk_series_dir(pure)
        series, year = _split_trailing_year_preserve_punct(name) if name else ("", None)
        if not series:
            return None
        return TvIdentity(
            series=series,
            year=year,
            season_number=season_number,
            episode_number=episode_number,
            episode_title=_extract_episode_title(suffix),
        )

    return None


def _series_and_year(path: PurePath, filename_prefix: str) -> tuple[str, int | None]:
    """Prefer a directory-derived series name; fall back to the filename prefix."""
    name = _walk_series_dir(path)
    if name is not None:
        return _split_trailing_year_preserve_punct(name)
    cleaned = clean(filename_prefix.rstrip(" ._-"))
    if not cleaned:
        return "", None
    return _split_trailing_year_clean(cleaned)


def _split_trailing_year_preserve_punct(name: str) -> tuple[str, int | None]:
    """Strip a trailing ``(YYYY)``/``YYYY`` without touching inner punctuation."""
    trimmed = name.strip()
    match = _DIR_YEAR_RE.match(trimmed)
    if match is not None:
        base = match.group("name").strip().rstrip(" ([-._")
        if base:
            return base, int(match.group("year"))
    return trimmed, None


def _split_trailing_year_clean(cleaned: str) -> tuple[str, int | None]:
    match = _CLEANED_YEAR_RE.match(cleaned)
    if match is not None:
        base = match.group("name").strip()
        if base:
            return base, int(match.group("year"))
    return cleaned, None


def _parse_season_episode(stem: str) -> _SeasonEpisode | None:
    for pattern in (_SXXEYY_RE, _NXMM_RE):
        match = pattern.search(stem)
        if match is not None:
            return _SeasonEpisode(
                season_number=int(match.group("s")),
                episode_number=int(match.group("e")),
                prefix=stem[: match.start()],
                suffix=stem[match.end():],
            )
    return None


def _parse_from_parent_season(path: PurePath, stem: str) -> tuple[int, int, str] | None:
    parent_name = path.parent.name
    if not parent_name:
        return None
    season_number = _parse_season_from_dirname(parent_name)
    if season_number is None:
        return None
    match = _LEADING_E_RE.match(stem)
    if match is None:
        return None
    return season_number, int(match.group("e")), stem[match.end():]


def _is_specials(name: str) -> bool:
    trimmed = name.strip()
    return trimmed.isascii() and trimmed.lower() == "specials"


def _parse_season_from_dirname(name: str) -> int | None:
    """Season number named by a directory; ``Specials`` is season 0."""
    match = _SEASON_DIR_NUMBER_RE.match(name)
    if match is not None:
        number = match.group("n") or match.group("n2")
        if number is not None:
            return int(number)
    if _is_specials(name):
        return 0
    return None


def _walk_series_dir(path: PurePath) -> str | None:
    """Find the nearest parent that names the series itself."""
    for parent in path.parents:
        name = parent.name
        if not name:
            break
        if _is_skippable_dir(name):
            continue
        stripped = strip_trailing_season_suffix(name)
        if stripped is not None:
            grand = parent.parent.name
            if (
                grand
                and not _is_skippable_dir(grand)
                and strip_trailing_season_suffix(grand) is None
            ):
                return grand
            return stripped
        return name
    return None


def _is_skippable_dir(name: str) -> bool:
    if _SEASON_DIR_RE.match(name):
        return True
    if _is_specials(name):
        return True
    return _JUNK_DIR_RE.match(name) is not None


def strip_trailing_season_suffix(name: str) -> str | None:
    """Return the cleaned part before a trailing season suffix such as ``S02``.

    Returns None when the name carries no such suffix.
    """
    match = _SEASON_SUFFIX_RE.match(name.strip())
    if match is None:
        return None
    base = match.group("base").strip()
    if not base:
        return None
    return clean(base)


def _extract_episode_title(suffix: str) -> str | None:
    """Episode title from the text after the episode marker, cut at quality tags."""
    trimmed = suffix.lstrip(_TITLE_LEAD_CHARS)
    if not trimmed:
        return None
    match = _QUALITY_RE.search(trimmed)
    candidate = trimmed[: match.start()] if match else trimmed
    return clean(candidate) or None