# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for the metarules CLI."""

from __future__ import annotations

import io
import json

import pytest

from metarules.cli import build_parser, main

HTML = (
    '<html lang="en"><head><title>Page</title>'
    '<meta name="keywords" content="a, b"></head><body></body></html>'
)


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(HTML, encoding="utf-8")
    return path


class TestExtractCommand:
    def test_json_output(self, html_file, capsys):
        main(["extract", str(html_file), "--url", "https://www.example.com/p"])
        record = json.loads(capsys.readouterr().out)
        assert record["title"] == "Page"
        assert record["keywords"] == ["a", "b"]
        assert record["provider"] == "example"
        assert record["type"] is None

    def test_field_filter(self, html_file, capsys):
        main(["extract", str(html_file), "--field", "title", "--field", "language"])
        assert json.loads(capsys.readouterr().out) == {"title": "Page", "language": "en"}

    def test_text_output(self, html_file, capsys):
        main(["extract", str(html_file), "--url", "https://a.com/", "--format", "text"])
        out = capsys.readouterr().out
        assert "title" in out and "Page" in out
        assert "a, b" in out
        lines = {line.split()[0]: line for line in out.splitlines()}
        assert lines["type"].split()[-1] == "-"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(HTML.encode())))
        main(["extract", "-", "--field", "title"])
        assert json.loads(capsys.readouterr().out) == {"title": "Page"}


class TestErrors:
    def test_unknown_field(self, html_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", str(html_file), "--field", "nope"])
        assert exc_info.value.code == 1
        assert "Unknown field" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", str(tmp_path / "missing.html")])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2


def test_verbose_logs_to_stderr(html_file, capsys):
    main(["-v", "extract", str(html_file), "--field", "title"])
    captured = capsys.readouterr()
    assert json.loads(captured.out) == {"title": "Page"}
    assert "Extracting 1 field(s)" in captured.err
