"""Content Index Builder — post documents to an ordered, navigable index.

Single pass, no I/O:
1. Validate each document into a ``Post`` (bad ones are skipped with a warning)
2. Reject duplicate permalinks (fatal)
3. Sort newest first, stable on discovery order
4. Group into the Category Index

Usage:
    index = build_index(documents, permalink_style="pretty")
    for post in index.recent(5):
        ...
"""

from __future__ import annotations

import re
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Iterable

from src.common.logging import setup_logging

from .errors import (
    ContentIndexError,
    DuplicatePermalink,
    InvalidFieldValue,
    MalformedDate,
    MissingRequiredField,
)
from .models import BuildWarning, ContentIndex, Layout, Post, PostDocument
from .permalink import (
    build_permalink,
    has_placeholders,
    normalize_permalink,
    resolve_template,
    slugify,
)

logger = setup_logging(module_name="builder")

DEFAULT_PERMALINK_STYLE = "pretty"

# Date part of "2022-08-20", "2022-08-20 10:00:00 -0500", "2022-08-20T10:00:00Z"
_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")


def parse_publish_date(value: Any, source: str) -> date:
    """Coerce a raw front matter date into a calendar date.

    Raises:
        MissingRequiredField: value is absent or blank.
        MalformedDate: value is present but not a date.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingRequiredField(source, "date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _DATE_PREFIX.match(value.strip())
        if match:
            year, month, day = (int(g) for g in match.groups())
            try:
                return date(year, month, day)
            except ValueError:
                pass
    raise MalformedDate(source, value)


def validate_document(document: PostDocument, permalink_style: str = DEFAULT_PERMALINK_STYLE) -> Post:
    """Turn one raw document into a ``Post``.

    Raises:
        MissingRequiredField, MalformedDate, InvalidFieldValue
    """
    if not document.title:
        raise MissingRequiredField(document.source, "title")

    publish_date = parse_publish_date(document.publish_date, document.source)

    try:
        layout = Layout(document.layout)
    except ValueError:
        raise InvalidFieldValue(document.source, "layout", document.layout) from None

    categories = tuple(dict.fromkeys(document.categories))

    if document.permalink and has_placeholders(document.permalink):
        # Per-post template, e.g. "/:year/:title/"
        permalink = build_permalink(document.permalink, document.title, publish_date, categories)
    elif document.permalink:
        permalink = normalize_permalink(document.permalink)
    else:
        permalink = build_permalink(permalink_style, document.title, publish_date, categories)

    return Post(
        source=document.source,
        title=document.title,
        publish_date=publish_date,
        slug=slugify(document.title),
        permalink=permalink,
        categories=categories,
        layout=layout,
        hero_image=document.hero_image,
        attribution=document.attribution,
        body=document.body,
    )


def _check_unique_permalinks(posts: list[Post]) -> None:
    seen: dict[str, Post] = {}
    for post in posts:
        first = seen.get(post.permalink)
        if first is not None:
            raise DuplicatePermalink(post.permalink, first.source, post.source)
        seen[post.permalink] = post


def _build_category_index(ordered: tuple[Post, ...]) -> MappingProxyType:
    grouped: dict[str, list[Post]] = {}
    for post in ordered:
        for category in dict.fromkeys(post.categories):
            grouped.setdefault(category, []).append(post)
    return MappingProxyType({name: tuple(posts) for name, posts in grouped.items()})


def build_index(
    documents: Iterable[PostDocument],
    permalink_style: str = DEFAULT_PERMALINK_STYLE,
    prior_warnings: Iterable[BuildWarning] = (),
) -> ContentIndex:
    """Build the publishable index from a snapshot of post documents.

    Args:
        documents: Post documents in discovery order.
        permalink_style: Named style or template used when a post has no
            explicit permalink.
        prior_warnings: Files already skipped before the build (see
            ``loader.load_corpus``). They lead the index warnings and are not
            logged again.

    Returns:
        ContentIndex with the ordered posts, Category Index and the warnings
        for every skipped document.

    Raises:
        DuplicatePermalink: two valid posts resolve to the same permalink.
        ValueError: ``permalink_style`` is not a known style or template.
    """
    resolve_template(permalink_style)

    posts: list[Post] = []
    warnings: list[BuildWarning] = list(prior_warnings)

    for document in documents:
        if not document.published:
            logger.debug("Skipping unpublished draft %s", document.source)
            continue
        if document.ignored_keys:
            logger.debug(
                "Ignoring unknown front matter keys in %s: %s",
                document.source, ", ".join(document.ignored_keys),
            )
        try:
            posts.append(validate_document(document, permalink_style))
        except ContentIndexError as e:
            logger.warning("Skipped post: %s", e)
            warnings.append(BuildWarning(source=e.source, kind=e.kind, message=str(e)))

    _check_unique_permalinks(posts)

    ordered = tuple(sorted(posts, key=lambda p: p.publish_date, reverse=True))
    categories = _build_category_index(ordered)

    logger.info(
        "Indexed %d posts in %d categories (%d skipped)",
        len(ordered), len(categories), len(warnings),
    )
    return ContentIndex(all=ordered, categories=categories, warnings=tuple(warnings))
