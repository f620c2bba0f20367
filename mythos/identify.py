"""Filename-based movie identification.

The title and year come from the file stem when it carries a
``<title> <year>`` pattern, otherwise from the parent directory
(``Movies/The Matrix (1999)/the.matrix.mkv``). When neither carries a
year, the cleaned-up stem is used as the title.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import PurePath

__all__ = ["Identity", "identify_movie", "clean"]

# The title is matched lazily up to a separator-then-year boundary. A
# separator (or the end) is required after the year, so the "2001" in
# "2001 A Space Odyssey 1968" is not taken as the year.
_TITLE_YEAR_RE = re.compile(
    r"^(?P<title>.+?)[\s._\-]+\(?(?P<year>19\d{2}|20\d{2})\)?(?:[\s._\-]|\Z)",
    re.IGNORECASE,
)

_SEPARATORS = str.maketrans({".": " ", "_": " ", "-": " "})


@dataclass(frozen=True)
class Identity:
    """A movie's title and, when known, its release year."""

    title: str
    year: int | None = None


def clean(raw: str) -> str:
    """Turn ``.``, ``_`` and ``-`` into spaces and squeeze whitespace runs."""
    return " ".join(raw.translate(_SEPARATORS).split())


def _parse(text: str) -> Identity | None:
    match = _TITLE_YEAR_RE.match(text)
    if match is None:
        return None
    title = clean(match.group("title"))
    if not title:
        return None
    return Identity(title=title, year=int(match.group("year")))


def identify_movie(path: str | os.PathLike[str]) -> Identity:
    """Identify a movie from its (usually library-relative) path."""
    pure = PurePath(path)
    stem = pure.stem if pure.name else ""
    parent = pure.parent.name
    return _parse(stem) or _parse(parent) or Identity(title=clean(stem), year=None)