"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DATA_EXPORTS_DIR = DATA_DIR / "exports"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class IndexSettings(BaseModel):
    """Settings for the content index build."""
    content_dir: str = "_posts"
    permalink_style: str = "pretty"
    recent_limit: int = Field(default=5, ge=0)
    output_path: str = str(DATA_EXPORTS_DIR / "content_index.json")
    extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])


class Settings(BaseModel):
    """Top-level application settings."""
    index: IndexSettings = Field(default_factory=IndexSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override whatever the YAML file says.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        index = dict(data.get("index") or {})
        if content_dir := os.getenv("CONTENT_DIR"):
            index["content_dir"] = content_dir
        if style := os.getenv("PERMALINK_STYLE"):
            index["permalink_style"] = style
        if limit := os.getenv("RECENT_LIMIT"):
            index["recent_limit"] = int(limit)
        if output := os.getenv("INDEX_OUTPUT_PATH"):
            index["output_path"] = output
        data["index"] = index
        return cls(**data)

    def resolve(self, path: str) -> Path:
        """Resolve a configured path relative to project root."""
        p = Path(path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


# Singleton settings instance
settings = Settings.load()
