# Content Index Builder
"""
Turns a tree of Markdown posts with YAML front matter into an ordered,
navigable index for the site's template renderer:
- loader: content directory -> PostDocument records
- frontmatter: YAML front matter and Jekyll-style file names
- permalink: slugs and permalink templates
- builder: build_index() — validation, ordering, Category Index
- exporter: JSON export of the index
"""

from .builder import build_index, parse_publish_date, validate_document
from .errors import (
    ContentIndexError,
    DuplicatePermalink,
    FrontMatterError,
    InvalidFieldValue,
    MalformedDate,
    MissingRequiredField,
)
from .exporter import IndexExporter, index_to_dict
from .loader import load_corpus, load_documents
from .models import BuildWarning, ContentIndex, Layout, Post, PostDocument, RecentView
from .permalink import PERMALINK_STYLES, build_permalink, slugify

__all__ = [
    "build_index",
    "parse_publish_date",
    "validate_document",
    "ContentIndexError",
    "DuplicatePermalink",
    "FrontMatterError",
    "InvalidFieldValue",
    "MalformedDate",
    "MissingRequiredField",
    "IndexExporter",
    "index_to_dict",
    "load_corpus",
    "load_documents",
    "BuildWarning",
    "ContentIndex",
    "Layout",
    "Post",
    "PostDocument",
    "RecentView",
    "PERMALINK_STYLES",
    "build_permalink",
    "slugify",
]
