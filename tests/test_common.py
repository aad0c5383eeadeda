"""Tests for shared common modules — config and logging."""

import io
import logging

import pytest

from src.common.config import PROJECT_ROOT, IndexSettings, Settings
from src.common.logging import ROOT_LOGGER_NAME, setup_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CONTENT_DIR", "PERMALINK_STYLE", "RECENT_LIMIT", "INDEX_OUTPUT_PATH"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults_without_file(self, tmp_path, clean_env):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.index.content_dir == "_posts"
        assert settings.index.permalink_style == "pretty"
        assert settings.index.recent_limit == 5
        assert settings.index.extensions == [".md", ".markdown"]

    def test_yaml_file(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "index:\n  content_dir: content/posts\n  recent_limit: 10\n",
            encoding="utf-8",
        )
        settings = Settings.load(path)
        assert settings.index.content_dir == "content/posts"
        assert settings.index.recent_limit == 10
        assert settings.index.permalink_style == "pretty"

    def test_env_overrides_yaml(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("index:\n  permalink_style: date\n", encoding="utf-8")
        clean_env.setenv("PERMALINK_STYLE", "title")
        clean_env.setenv("RECENT_LIMIT", "3")

        settings = Settings.load(path)
        assert settings.index.permalink_style == "title"
        assert settings.index.recent_limit == 3

    def test_negative_recent_rejected(self):
        with pytest.raises(Exception):
            IndexSettings(recent_limit=-1)

    def test_resolve(self, tmp_path):
        settings = Settings()
        assert settings.resolve(str(tmp_path)) == tmp_path
        assert settings.resolve("_posts") == PROJECT_ROOT / "_posts"


class TestSetupLogging:
    def test_module_loggers_are_children(self):
        logger = setup_logging(module_name="builder")
        assert logger.name == f"{ROOT_LOGGER_NAME}.builder"

    def test_single_handler_relevelled(self):
        setup_logging(level=logging.INFO)
        root = setup_logging(level=logging.DEBUG)
        assert root.name == ROOT_LOGGER_NAME
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert root.handlers[0].level == logging.DEBUG
        setup_logging(level=logging.INFO)

    def test_format(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        saved = list(root.handlers)
        for handler in saved:
            root.removeHandler(handler)
        try:
            stream = io.StringIO()
            logger = setup_logging(module_name="exporter", stream=stream)
            logger.info("Index written")
            assert "[INFO] content_index.exporter: Index written" in stream.getvalue()
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in saved:
                root.addHandler(handler)
