"""Content loader — reads a directory of Markdown posts into documents.

Discovery order is the sorted relative path, so builds are reproducible
and ties on publish date resolve the same way every time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from src.common.logging import setup_logging

from .errors import FrontMatterError, InvalidFieldValue
from .frontmatter import parse_filename, split_front_matter
from .models import BuildWarning, PostDocument

logger = setup_logging(module_name="loader")

DEFAULT_EXTENSIONS = (".md", ".markdown")


def discover_files(content_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[Path]:
    """List content files under ``content_dir`` in discovery order."""
    suffixes = {e.lower() for e in extensions}
    files = [
        p for p in content_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in suffixes
    ]
    return sorted(files, key=lambda p: p.relative_to(content_dir).as_posix())


def load_document(path: Path, source: str) -> PostDocument:
    """Read one content file.

    Raises:
        FrontMatterError: front matter block cannot be parsed.
        OSError, UnicodeDecodeError: file cannot be read as UTF-8.
    """
    text = path.read_text(encoding="utf-8")
    meta, body = split_front_matter(text, source=source)
    fallback_date, fallback_title = parse_filename(path.name)
    return PostDocument.from_front_matter(
        source,
        meta,
        body=body,
        fallback_date=fallback_date,
        fallback_title=fallback_title,
    )


def load_corpus(
    content_dir: Path | str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> tuple[list[PostDocument], list[BuildWarning]]:
    """Load every content file under ``content_dir``.

    Files that cannot be read or parsed are logged and skipped; each skip is
    also returned as a BuildWarning so it can be passed to ``build_index``.

    Returns:
        (documents, warnings), both in discovery order.

    Raises:
        FileNotFoundError: ``content_dir`` does not exist or is not a directory.
    """
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    documents: list[PostDocument] = []
    warnings: list[BuildWarning] = []
    for path in discover_files(content_dir, extensions):
        source = path.relative_to(content_dir).as_posix()
        try:
            documents.append(load_document(path, source))
            continue
        except FrontMatterError as e:
            warning = BuildWarning(source=source, kind=e.kind, message=str(e))
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            warning = BuildWarning(
                source=source,
                kind=InvalidFieldValue.kind,
                message=f"{source}: invalid front matter values ({fields or e.error_count()})",
            )
        except (OSError, UnicodeDecodeError) as e:
            warning = BuildWarning(
                source=source,
                kind="UnreadableFile",
                message=f"{source}: unreadable ({e})",
            )
        logger.warning("Skipped file: %s", warning.message)
        warnings.append(warning)

    logger.info("Loaded %d documents from %s", len(documents), content_dir)
    return documents, warnings


def load_documents(
    content_dir: Path | str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[PostDocument]:
    """Like ``load_corpus`` but returns only the documents."""
    documents, _ = load_corpus(content_dir, extensions)
    return documents
