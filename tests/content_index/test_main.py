"""Tests for the content index CLI."""

import json
import logging

import pytest

from src.content_index.main import main


def _post(title: str, date: str, extra: str = "") -> str:
    return f"---\ntitle: {title}\ndate: {date}\n{extra}---\nBody of {title}.\n"


class TestMain:
    def test_success_writes_index(self, write_post, tmp_path):
        write_post("chess.md", _post("Why I Play Chess", "2022-06-03", "categories: [chess]\n"))
        write_post("blog.md", _post("Creating a new blog", "2022-08-20", "categories: [programming]\n"))
        output = tmp_path / "out" / "index.json"

        code = main([
            "--content-dir", str(write_post.content_dir),
            "--output", str(output),
            "--recent", "3",
        ])

        assert code == 0
        export = json.loads(output.read_text(encoding="utf-8"))
        assert [p["title"] for p in export["posts"]] == ["Creating a new blog", "Why I Play Chess"]
        assert len(export["recent"]) == 2

    def test_skipped_post_warns_once(self, write_post, tmp_path, caplog):
        write_post("chess.md", _post("Why I Play Chess", "2022-06-03"))
        write_post("draft.md", "---\ntitle: Untitled draft\n---\nNo date.\n")

        with caplog.at_level(logging.INFO, logger="content_index"):
            code = main([
                "--content-dir", str(write_post.content_dir),
                "--output", str(tmp_path / "index.json"),
            ])

        assert code == 0
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "draft.md" in warnings[0].getMessage()

    def test_duplicate_permalink_exits_nonzero(self, write_post, tmp_path, caplog):
        write_post("chess.md", _post("Chess", "2022-06-03", "permalink: /chess/\n"))
        write_post("chess-again.md", _post("Chess again", "2022-06-04", "permalink: /chess/\n"))
        output = tmp_path / "index.json"

        code = main([
            "--content-dir", str(write_post.content_dir),
            "--output", str(output),
        ])

        assert code == 1
        assert not output.exists()
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert any("chess.md" in m and "chess-again.md" in m for m in errors)

    def test_no_write(self, write_post, tmp_path):
        write_post("chess.md", _post("Chess", "2022-06-03"))
        output = tmp_path / "index.json"
        code = main([
            "--content-dir", str(write_post.content_dir),
            "--output", str(output),
            "--no-write",
        ])
        assert code == 0
        assert not output.exists()

    def test_missing_content_dir(self, tmp_path):
        assert main(["--content-dir", str(tmp_path / "missing"), "--no-write"]) == 2

    def test_bad_style_is_usage_error(self, write_post):
        with pytest.raises(SystemExit) as exc:
            main(["--content-dir", str(write_post.content_dir), "--permalink-style", "fancy"])
        assert exc.value.code == 2

    def test_negative_recent_is_usage_error(self, write_post):
        with pytest.raises(SystemExit) as exc:
            main(["--content-dir", str(write_post.content_dir), "--recent", "-1"])
        assert exc.value.code == 2

    def test_impossible_date_is_not_fatal(self, write_post, tmp_path):
        write_post("chess.md", _post("Why I Play Chess", "2022-06-03"))
        write_post("leap.md", _post("Leap day", "2022-02-30"))
        output = tmp_path / "index.json"

        code = main(["--content-dir", str(write_post.content_dir), "--output", str(output)])

        assert code == 0
        export = json.loads(output.read_text(encoding="utf-8"))
        assert [p["title"] for p in export["posts"]] == ["Why I Play Chess"]
        assert [(w["source"], w["kind"]) for w in export["warnings"]] == [("leap.md", "MalformedDate")]

    def test_broken_file_listed_in_export(self, write_post, tmp_path, caplog):
        write_post("chess.md", _post("Why I Play Chess", "2022-06-03"))
        write_post("broken.md", "---\ntitle: [oops\n---\nbody\n")
        output = tmp_path / "index.json"

        with caplog.at_level(logging.INFO, logger="content_index"):
            code = main(["--content-dir", str(write_post.content_dir), "--output", str(output)])

        assert code == 0
        export = json.loads(output.read_text(encoding="utf-8"))
        assert [(w["source"], w["kind"]) for w in export["warnings"]] == [("broken.md", "FrontMatterError")]
        assert any("skipped: 1" in r.getMessage() for r in caplog.records)
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1


class TestMainPaths:
    def test_relative_paths_follow_working_directory(self, write_post, tmp_path, monkeypatch):
        write_post("2022-06-03-chess.md", _post("Why I Play Chess", "2022-06-03"))
        monkeypatch.chdir(tmp_path)

        code = main(["--content-dir", "_posts", "--output", "out/index.json"])

        assert code == 0
        export = json.loads((tmp_path / "out" / "index.json").read_text(encoding="utf-8"))
        assert export["post_count"] == 1

    def test_missing_relative_dir_reported_against_cwd(self, tmp_path, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        assert main(["--content-dir", "nowhere", "--no-write"]) == 2
        assert any(str((tmp_path / "nowhere").resolve()) in r.getMessage() for r in caplog.records)
