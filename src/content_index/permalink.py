"""Permalink derivation.

Permalinks are expanded from Jekyll-style templates. Supported
placeholders: ``:year``, ``:month``, ``:day``, ``:short_year``,
``:title``, ``:slug`` (same as ``:title``) and ``:categories``.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from typing import Iterable

# Named styles
PERMALINK_STYLES: dict[str, str] = {
    "date": "/:categories/:year/:month/:day/:title.html",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "title": "/:title/",
    "none": "/:categories/:title/",
}

_PLACEHOLDER = re.compile(r":(short_year|year|month|day|title|slug|categories)")
_NON_WORD = re.compile(r"[\W_]+", re.UNICODE)
_REPEATED_SLASH = re.compile(r"/{2,}")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse everything but letters and digits to '-'.

    Input is NFC-normalised first, so composed and decomposed spellings of
    the same accented title give the same slug.
    """
    text = unicodedata.normalize("NFC", text.strip().lower())
    return _NON_WORD.sub("-", text).strip("-")


def resolve_template(style: str) -> str:
    """Return the template for a named style, or ``style`` itself if it is one.

    Raises:
        ValueError: ``style`` is neither a known name nor a template.
    """
    if style in PERMALINK_STYLES:
        return PERMALINK_STYLES[style]
    if ":" in style or style.startswith("/"):
        return style
    raise ValueError(
        f"unknown permalink style {style!r}; "
        f"expected one of {sorted(PERMALINK_STYLES)} or a template"
    )


def has_placeholders(path: str) -> bool:
    """True when ``path`` contains a template placeholder such as ``:year``."""
    return _PLACEHOLDER.search(path) is not None


def normalize_permalink(path: str) -> str:
    """Give a permalink exactly one leading slash and no doubled slashes."""
    path = _REPEATED_SLASH.sub("/", "/" + path.strip())
    return path


def build_permalink(
    style: str,
    title: str,
    publish_date: date,
    categories: Iterable[str] = (),
) -> str:
    """Expand a permalink style for one post.

    Args:
        style: Named style (see PERMALINK_STYLES) or a template string.
        title: Post title, slugified into ``:title``.
        publish_date: Drives ``:year``, ``:month``, ``:day``.
        categories: Joined as slugified path segments into ``:categories``.

    Returns:
        Normalised permalink path, e.g. ``/chess/2022/06/03/why-i-play-chess/``.
    """
    template = resolve_template(style)
    slug = slugify(title)
    values = {
        "year": f"{publish_date.year:04d}",
        "short_year": f"{publish_date.year % 100:02d}",
        "month": f"{publish_date.month:02d}",
        "day": f"{publish_date.day:02d}",
        "title": slug,
        "slug": slug,
        "categories": "/".join(s for s in (slugify(c) for c in categories) if s),
    }
    expanded = _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)
    return normalize_permalink(expanded)
