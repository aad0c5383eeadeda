"""Data models for the content index builder.

``PostDocument`` is the raw record read from one content file (pydantic,
lenient). ``Post`` is the validated, immutable entity the index is built
from. ``ContentIndex`` is the builder's output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from itertools import islice
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Layout(str, Enum):
    """Rendering template selector. Informational to the index."""
    PAGE = "page"
    POST = "post"


# Front matter keys the index understands. Anything else is ignored.
KNOWN_FRONT_MATTER_KEYS = frozenset({
    "title",
    "date",
    "categories",
    "category",
    "layout",
    "hero_image",
    "image",
    "header_image",
    "attribution",
    "permalink",
    "published",
})


def split_categories(value: Any) -> tuple[str, ...]:
    """Normalise a categories value to a tuple of names."""
    # Jekyll accepts either a YAML list or a space-separated string
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, (list, tuple, set)):
        return tuple(str(c).strip() for c in value if c is not None and str(c).strip())
    return (str(value),)


class PostDocument(BaseModel):
    """One content file as discovered, before validation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    source: str
    title: Optional[str] = None
    publish_date: Any = Field(default=None, alias="date")  # date, datetime or str
    categories: tuple[str, ...] = ()
    layout: str = Layout.POST.value
    hero_image: Optional[str] = None
    attribution: Optional[str] = None
    permalink: Optional[str] = None
    published: bool = True
    body: str = ""
    ignored_keys: tuple[str, ...] = ()

    @field_validator("title", "hero_image", "attribution", "permalink", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("categories", mode="before")
    @classmethod
    def _split_categories(cls, value: Any) -> tuple[str, ...]:
        return split_categories(value)

    @field_validator("layout", mode="before")
    @classmethod
    def _layout_text(cls, value: Any) -> str:
        if value is None:
            return Layout.POST.value
        if isinstance(value, Layout):
            return value.value
        return str(value).strip().lower()

    @classmethod
    def from_front_matter(
        cls,
        source: str,
        meta: Mapping[str, Any],
        body: str = "",
        fallback_date: Optional[date] = None,
        fallback_title: Optional[str] = None,
    ) -> PostDocument:
        """Build a document from a parsed front matter mapping.

        Unknown keys are dropped and listed in ``ignored_keys``.
        Filename-derived date and title only fill gaps.
        """
        categories = list(split_categories(meta.get("categories")))
        for extra in split_categories(meta.get("category")):
            if extra not in categories:
                categories.append(extra)

        hero_image = meta.get("hero_image") or meta.get("image") or meta.get("header_image")

        publish_date = meta.get("date")
        if publish_date is None:
            publish_date = fallback_date

        title = meta.get("title")
        if title is None or not str(title).strip():
            title = fallback_title

        published = meta.get("published", True)
        if published is None:
            published = True

        return cls(
            source=source,
            title=title,
            publish_date=publish_date,
            categories=tuple(categories),
            layout=meta.get("layout"),
            hero_image=hero_image,
            attribution=meta.get("attribution"),
            permalink=meta.get("permalink"),
            published=published,
            body=body,
            ignored_keys=tuple(sorted(
                str(k) for k in meta if str(k) not in KNOWN_FRONT_MATTER_KEYS
            )),
        )


@dataclass(frozen=True)
class Post:
    """A validated, immutable content entity."""
    source: str
    title: str
    publish_date: date
    slug: str
    permalink: str
    categories: tuple[str, ...] = ()
    layout: Layout = Layout.POST
    hero_image: Optional[str] = None
    attribution: Optional[str] = None
    body: str = ""

    def to_dict(self, include_body: bool = False) -> dict:
        """Serialize to dictionary for JSON export."""
        data = {
            "title": self.title,
            "publish_date": self.publish_date.isoformat(),
            "slug": self.slug,
            "permalink": self.permalink,
            "categories": list(self.categories),
            "layout": self.layout.value,
            "hero_image": self.hero_image,
            "attribution": self.attribution,
            "source": self.source,
        }
        if include_body:
            data["body"] = self.body
        return data


@dataclass(frozen=True)
class BuildWarning:
    """A post skipped during the build, and why."""
    source: str
    kind: str  # MissingRequiredField | MalformedDate | InvalidFieldValue | FrontMatterError | UnreadableFile
    message: str

    def to_dict(self) -> dict:
        return {"source": self.source, "kind": self.kind, "message": self.message}


class RecentView:
    """Lazy, restartable view over the first ``n`` posts of an index.

    Iterating twice yields the same posts; nothing is copied up front.
    """

    def __init__(self, posts: tuple[Post, ...], n: int):
        if n < 0:
            raise ValueError(f"recent() needs n >= 0, got {n}")
        self._posts = posts
        self._limit = min(n, len(posts))

    def __iter__(self) -> Iterator[Post]:
        return islice(self._posts, self._limit)

    def __len__(self) -> int:
        return self._limit

    def __getitem__(self, item):
        if isinstance(item, slice):
            return self._posts[:self._limit][item]
        if item < 0:
            item += self._limit
        if not 0 <= item < self._limit:
            raise IndexError("recent view index out of range")
        return self._posts[item]

    def __repr__(self) -> str:
        return f"RecentView({self._limit} of {len(self._posts)})"


@dataclass(frozen=True)
class ContentIndex:
    """Ordered, navigable index of a post corpus."""
    all: tuple[Post, ...] = ()
    categories: Mapping[str, tuple[Post, ...]] = field(
        default_factory=lambda: MappingProxyType({}),
        hash=False,
    )
    warnings: tuple[BuildWarning, ...] = ()

    def recent(self, n: int) -> RecentView:
        """Newest ``n`` posts (fewer if the corpus is smaller)."""
        return RecentView(self.all, n)

    def category(self, name: str) -> tuple[Post, ...]:
        """Posts filed under ``name``, newest first. Empty if unknown."""
        return self.categories.get(name, ())

    def get(self, permalink: str) -> Optional[Post]:
        """Look a post up by its permalink."""
        for post in self.all:
            if post.permalink == permalink:
                return post
        return None

    def __len__(self) -> int:
        return len(self.all)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.all)
