"""Shared test fixtures for the content index builder."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.content_index.models import PostDocument


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def make_document():
    """Factory for PostDocument with sensible defaults."""
    counter = {"n": 0}

    def _make(**fields) -> PostDocument:
        counter["n"] += 1
        fields.setdefault("source", f"post-{counter['n']}.md")
        return PostDocument(**fields)

    return _make


@pytest.fixture
def sample_documents(make_document) -> list[PostDocument]:
    """Two posts from the blog, oldest discovered first."""
    return [
        make_document(
            source="2022-06-03-why-i-play-chess.md",
            title="Why I Play Chess",
            date="2022-06-03",
            categories=["chess"],
            hero_image="/assets/images/chess-board.jpg",
            attribution="Photo by Felix Mittermeier",
            body="I started playing chess during the lockdown...",
        ),
        make_document(
            source="2022-08-20-creating-a-new-blog.md",
            title="Creating a new blog with Jekyll and GitHub Pages",
            date="2022-08-20",
            categories=["programming"],
            body="This blog is built from plain Markdown files...",
        ),
    ]


@pytest.fixture
def write_post(tmp_path):
    """Write a content file under tmp_path/_posts and return its path."""
    content_dir = tmp_path / "_posts"
    content_dir.mkdir()

    def _write(name: str, text: str) -> Path:
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    _write.content_dir = content_dir
    return _write
