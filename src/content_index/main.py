"""CLI entry point for the content index builder.

Usage:
    python -m src.content_index.main --content-dir _posts
    python -m src.content_index.main --content-dir _posts --output data/exports/index.json
    python -m src.content_index.main --content-dir _posts --permalink-style "/:year/:title/" --recent 3

Exit status: 0 on success (skipped posts only warn), 1 on a duplicate
permalink, 2 on bad arguments or a missing content directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.common.config import settings
from src.common.logging import setup_logging

from .builder import build_index
from .errors import DuplicatePermalink
from .exporter import IndexExporter
from .loader import load_corpus
from .permalink import resolve_template

logger = setup_logging(module_name="main")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    cfg = settings.index
    parser = argparse.ArgumentParser(description="Content Index Builder")
    parser.add_argument(
        "--content-dir",
        type=str,
        default=None,
        help=f"Directory of Markdown posts, relative to the working directory "
             f"(default: settings index.content_dir = {cfg.content_dir})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path, relative to the working directory "
             "(default: settings index.output_path)",
    )
    parser.add_argument(
        "--recent",
        type=int,
        default=cfg.recent_limit,
        help=f"Number of posts in the recent list (default: {cfg.recent_limit})",
    )
    parser.add_argument(
        "--permalink-style",
        type=str,
        default=cfg.permalink_style,
        help="Named style (date, pretty, title, none) or template like '/:year/:title/'",
    )
    parser.add_argument(
        "--no-write",
        action="store_true",
        help="Build and validate only; do not write the JSON index",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    if args.recent < 0:
        parser.error("--recent must be >= 0")
    try:
        resolve_template(args.permalink_style)
    except ValueError as e:
        parser.error(str(e))
    return args


def _resolve_path(cli_value: str | None, configured: str) -> Path:
    """Command-line paths are relative to the working directory; configured
    ones to the project root."""
    if cli_value is not None:
        return Path(cli_value).resolve()
    return settings.resolve(configured)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    content_dir = _resolve_path(args.content_dir, settings.index.content_dir)
    try:
        documents, load_warnings = load_corpus(content_dir, extensions=settings.index.extensions)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 2

    try:
        index = build_index(
            documents,
            permalink_style=args.permalink_style,
            prior_warnings=load_warnings,
        )
    except DuplicatePermalink as e:
        logger.error("Build aborted: %s", e)
        return 1

    logger.info("=== Content Index: %s ===", content_dir)
    logger.info("Posts: %d, skipped: %d", len(index.all), len(index.warnings))
    for post in index.recent(args.recent):
        logger.info("  %s  %s -> %s", post.publish_date.isoformat(), post.title, post.permalink)
    for name, posts in sorted(index.categories.items()):
        logger.info("  [%s] %d posts", name, len(posts))

    if not args.no_write:
        output = _resolve_path(args.output, settings.index.output_path)
        IndexExporter(recent=args.recent).export(index, output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
