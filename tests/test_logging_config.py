#!/usr/bin/env python3
"""
Tests for common/logging_config.py

Covers run ID correlation, structured output and handler setup.
"""

import contextvars
import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from common.logging_config import (
    LogContext,
    RunIdFilter,
    StructuredFormatter,
    generate_run_id,
    get_run_id,
    set_run_id,
    setup_logging,
)


def _record(msg="built %s", args=("k12",), name="sentinel.engine"):
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, args, None)


class TestRunId:
    """Tests for run ID helpers."""

    def test_generate_run_id(self):
        run_id = generate_run_id()
        assert len(run_id) == 8
        assert run_id != generate_run_id()

    def test_set_run_id(self):
        def _inner():
            assert set_run_id("abc12345") == "abc12345"
            assert get_run_id() == "abc12345"
            assert len(set_run_id()) == 8

        contextvars.copy_context().run(_inner)

    def test_log_context_sets_and_resets(self):
        before = get_run_id()
        with LogContext("run00001") as run_id:
            assert run_id == "run00001"
            assert get_run_id() == "run00001"
        assert get_run_id() == before

    def test_log_context_generates_id(self):
        with LogContext() as run_id:
            assert len(run_id) == 8
            assert get_run_id() == run_id


class TestRunIdFilter:
    """Tests for RunIdFilter."""

    def test_adds_run_id(self):
        record = _record()
        with LogContext("feedbeef"):
            assert RunIdFilter().filter(record)
        assert record.run_id == "feedbeef"

    def test_placeholder_without_context(self):
        record = _record()
        contextvars.Context().run(RunIdFilter().filter, record)
        assert record.run_id == "no-run-id"


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_json_fields(self):
        record = _record()
        record.run_id = "abcd1234"
        data = json.loads(StructuredFormatter().format(record))
        assert data["message"] == "built k12"
        assert data["level"] == "INFO"
        assert data["logger"] == "sentinel.engine"
        assert data["run_id"] == "abcd1234"
        assert "timestamp" in data

    def test_extra_fields(self):
        record = _record()
        data = json.loads(StructuredFormatter(extra_fields={"service": "sentinel"}).format(record))
        assert data["service"] == "sentinel"
        assert "run_id" not in data

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self, restore_root_logging):
        root = setup_logging(log_level=logging.DEBUG)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler_writes(self, tmp_path, restore_root_logging):
        log_file = tmp_path / "logs" / "sentinel.log"
        root = setup_logging(log_file=log_file, enable_console=False)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RotatingFileHandler)

        with LogContext("c0ffee00"):
            logging.getLogger("sentinel.test").info("series built")
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "series built" in content
        assert "[c0ffee00]" in content

    def test_structured_output(self, tmp_path, restore_root_logging):
        root = setup_logging(log_file=tmp_path / "s.log", structured_output=True)
        assert all(isinstance(h.formatter, StructuredFormatter) for h in root.handlers)
