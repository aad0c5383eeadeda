"""Error taxonomy for the content index build.

Recoverable errors (``MissingRequiredField`` and its subclasses,
``InvalidFieldValue``, ``FrontMatterError``) cause a single post to be
skipped with a warning. ``DuplicatePermalink`` is fatal and aborts the build.
"""

from __future__ import annotations

from typing import Any


class ContentIndexError(Exception):
    """Base class for all content index errors."""

    recoverable = True

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(message)


class MissingRequiredField(ContentIndexError):
    """A post lacks a field the index cannot do without."""

    kind = "MissingRequiredField"

    def __init__(self, source: str, field: str):
        self.field = field
        super().__init__(source, f"{source}: missing required field '{field}'")


class MalformedDate(MissingRequiredField):
    """A post's date is present but cannot be read as a calendar date."""

    kind = "MalformedDate"

    def __init__(self, source: str, value: Any):
        self.value = value
        ContentIndexError.__init__(
            self, source, f"{source}: malformed date {value!r}",
        )
        self.field = "date"


class InvalidFieldValue(ContentIndexError):
    """A known front matter field holds a value outside its allowed set."""

    kind = "InvalidFieldValue"

    def __init__(self, source: str, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(source, f"{source}: invalid value {value!r} for '{field}'")


class FrontMatterError(ContentIndexError):
    """A content file's front matter block cannot be parsed."""

    kind = "FrontMatterError"

    def __init__(self, source: str, reason: str):
        self.reason = reason
        super().__init__(source, f"{source}: bad front matter ({reason})")


class DuplicatePermalink(ContentIndexError):
    """Two posts resolve to the same permalink."""

    kind = "DuplicatePermalink"
    recoverable = False

    def __init__(self, permalink: str, first_source: str, second_source: str):
        self.permalink = permalink
        self.first_source = first_source
        self.second_source = second_source
        super().__init__(
            second_source,
            f"duplicate permalink {permalink!r}: "
            f"'{first_source}' and '{second_source}'",
        )
