"""Tests for structured logging setup."""

import json
import logging

from ragchunk.core.logging import log, setup_logging


def test_json_events_go_to_stderr(capsys):
    setup_logging("json")
    log.info("chunk.test", category="glossary")

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip().splitlines()[-1])
    assert event["event"] == "chunk.test"
    assert event["category"] == "glossary"
    assert event["level"] == "info"


def test_debug_filtered_by_default(capsys):
    setup_logging("plain")
    log.debug("chunk.fallback", reason="no_headings")
    assert capsys.readouterr().err == ""


def test_debug_level_enabled(capsys):
    setup_logging("plain", level=logging.DEBUG)
    log.debug("chunk.fallback", reason="no_headings")
    assert "chunk.fallback" in capsys.readouterr().err


def test_auto_uses_json_under_ci(capsys, monkeypatch):
    monkeypatch.setenv("CI", "true")
    setup_logging("auto")
    log.info("chunk.test")
    json.loads(capsys.readouterr().err.strip())
