"""Front matter parsing for Markdown content files.

A content file may open with a YAML block fenced by ``---`` lines::

    ---
    title: Why I Play Chess
    date: 2022-06-03
    categories: [chess]
    ---
    Body text...

Files named the Jekyll way (``2022-06-03-why-i-play-chess.md``) also
carry a fallback date and title in the file name.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

import yaml

from .errors import FrontMatterError

_OPENING_FENCE = re.compile(r"\A\ufeff?---[ \t]*\r?\n")
_CLOSING_FENCE = re.compile(r"^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.MULTILINE)
_DATED_FILENAME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+?)(?:\.[A-Za-z0-9]+)?$")


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings.

    Dates are parsed later, per post, so an impossible date like 2022-02-30
    skips one post instead of failing the YAML load.
    """


_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_front_matter(text: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Split a document into its front matter mapping and body.

    Args:
        text: Full file contents.
        source: Identifier used in error messages.

    Returns:
        (metadata, body). Documents without front matter return ({}, text).

    Raises:
        FrontMatterError: the block is unterminated, not valid YAML, or not
            a mapping.
    """
    opening = _OPENING_FENCE.match(text)
    if not opening:
        return {}, text

    closing = _CLOSING_FENCE.search(text, opening.end())
    if not closing:
        raise FrontMatterError(source, "unterminated front matter block")

    raw = text[opening.end():closing.start()]
    try:
        meta = yaml.load(raw, Loader=_FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise FrontMatterError(source, f"invalid YAML: {e}") from e

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(source, f"expected a mapping, got {type(meta).__name__}")

    body = text[closing.end():]
    return meta, body


def parse_filename(name: str) -> tuple[Optional[date], Optional[str]]:
    """Extract (date, title) from a ``YYYY-MM-DD-title.md`` file name.

    Returns (None, None) when the name does not follow the convention or the
    date prefix is not a real calendar date.
    """
    match = _DATED_FILENAME.match(name)
    if not match:
        return None, None

    year, month, day, rest = match.groups()
    try:
        published = date(int(year), int(month), int(day))
    except ValueError:
        return None, None

    words = [w for w in re.split(r"[-_]+", rest) if w]
    title = " ".join(w[:1].upper() + w[1:] for w in words) or None
    return published, title
