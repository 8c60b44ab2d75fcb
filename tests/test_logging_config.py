# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for metarules.logging_config — structlog + stdlib bridge."""

from __future__ import annotations

import io
import json
import logging
import sys

from metarules.logging_config import configure


class TestConsoleRenderer:
    def test_single_stderr_handler(self):
        configure(json_output=False)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_human_readable(self, capsys):
        configure(json_output=False, level="INFO")
        logging.getLogger("test.console").info("hello world")
        err = capsys.readouterr().err
        assert "hello world" in err
        assert not err.strip().startswith("{")

    def test_default_level_hides_info(self, capsys):
        configure(json_output=False, level="WARNING")
        logging.getLogger("test.quiet").info("not shown")
        assert "not shown" not in capsys.readouterr().err


class TestJSONRenderer:
    def test_valid_json_lines(self):
        stream = io.StringIO()
        configure(json_output=True, level="DEBUG", stream=stream)
        logging.getLogger("metarules.engine").debug("picked %s", "og:title")
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "picked og:title"
        assert record["level"] == "debug"
        assert record["logger"] == "metarules.engine"
        assert "timestamp" in record


class TestLevel:
    def test_level_set(self):
        configure(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back(self):
        configure(level="chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_package_level_scoped_to_metarules(self):
        stream = io.StringIO()
        configure(level="WARNING", package_level="DEBUG", stream=stream)
        logging.getLogger("metarules.engine").debug("engine detail")
        logging.getLogger("other.lib").debug("library noise")
        out = stream.getvalue()
        assert "engine detail" in out
        assert "library noise" not in out

    def test_package_level_reset_when_omitted(self):
        configure(package_level="DEBUG")
        configure()
        assert logging.getLogger("metarules").level == logging.NOTSET


class TestExtractionContext:
    def test_records_carry_url_and_field(self):
        from metarules.metadata import extract_metadata_from_html

        stream = io.StringIO()
        configure(json_output=True, package_level="DEBUG", stream=stream)
        extract_metadata_from_html('<meta property="og:title" content="Foo">', "https://a.com/p")
        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        picked = [r for r in records if r["logger"] == "metarules.engine" and r.get("field") == "title"]
        assert picked
        assert all(r["url"] == "https://a.com/p" for r in picked)

    def test_context_unbound_after_extraction(self):
        from metarules.metadata import extract_metadata_from_html

        stream = io.StringIO()
        configure(json_output=True, package_level="DEBUG", stream=stream)
        extract_metadata_from_html("<title>x</title>", "https://a.com/")
        logging.getLogger("metarules.cli").info("after")
        last = json.loads(stream.getvalue().splitlines()[-1])
        assert last["event"] == "after"
        assert "field" not in last
        assert "url" not in last
