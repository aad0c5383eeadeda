"""Index exporter — generates JSON for the template renderer.

Output schema:
- post_count / category_count
- posts: every post, newest first
- recent: permalinks of the newest N posts
- categories: category name -> permalinks, newest first
- warnings: posts skipped during the build

The output carries no timestamps, so rebuilding an unchanged corpus
produces a byte-identical file.
"""

from __future__ import annotations

import json
from pathlib import Path

from src.common.logging import setup_logging

from .models import ContentIndex

logger = setup_logging(module_name="exporter")


def index_to_dict(index: ContentIndex, recent: int = 5, include_body: bool = False) -> dict:
    """Serialize a ContentIndex into a JSON-ready dictionary."""
    return {
        "post_count": len(index.all),
        "category_count": len(index.categories),
        "posts": [post.to_dict(include_body=include_body) for post in index.all],
        "recent": [post.permalink for post in index.recent(recent)],
        "categories": {
            name: [post.permalink for post in posts]
            for name, posts in sorted(index.categories.items())
        },
        "warnings": [w.to_dict() for w in index.warnings],
    }


class IndexExporter:
    """Export a ContentIndex to a JSON file."""

    def __init__(self, recent: int = 5, include_body: bool = False):
        self.recent = recent
        self.include_body = include_body

    def render(self, index: ContentIndex) -> str:
        """Render the index as JSON text (with trailing newline)."""
        export = index_to_dict(index, recent=self.recent, include_body=self.include_body)
        return json.dumps(export, ensure_ascii=False, indent=2) + "\n"

    def export(self, index: ContentIndex, output_path: str | Path) -> Path:
        """Write the index JSON to ``output_path``, creating parent dirs.

        Returns:
            The path written.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.render(index))
        logger.info("Index written to %s", output_path)
        return output_path
