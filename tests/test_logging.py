"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from capsule_feed.config import LoggingConfig
from capsule_feed.utils.logging import log_event, setup_logging


def test_jsonl_file_logging_includes_extra_fields(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")

    logger = setup_logging(cfg, tmp_path)
    log_event(logger, "Adding entry", event="entry_added", title="Hello")
    for handler in logger.handlers:
        handler.flush()

    record = json.loads((tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()[0])
    assert record["message"] == "Adding entry"
    assert record["event"] == "entry_added"
    assert record["title"] == "Hello"
    assert record["level"] == "INFO"


def test_quiet_console_handler_drops_info(tmp_path: Path):
    logger = setup_logging(LoggingConfig(quiet=True), tmp_path)

    (handler,) = logger.handlers
    assert handler.level == logging.WARNING
    assert not (tmp_path / "capsule-feed.log").exists()


def test_log_event_tolerates_missing_logger():
    log_event(None, "ignored", event="noop")
