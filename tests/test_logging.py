"""Tests for structured logging output."""

import io
import json
import logging
import sys

from configcanon.logging_config import StructuredFormatter, configure_logging


def test_structured_formatter_includes_extra_fields():
    """Fields passed through `extra` appear in the JSON line."""
    record = logging.LogRecord(
        "configcanon.test", logging.INFO, __file__, 10, "canonicalized %s", ("paper.yml",), None
    )
    record.location = "paper.yml"
    record.canonical_length = 42

    data = json.loads(StructuredFormatter().format(record))

    assert data["message"] == "canonicalized paper.yml"
    assert data["level"] == "INFO"
    assert data["logger"] == "configcanon.test"
    assert data["location"] == "paper.yml"
    assert data["canonical_length"] == 42


def test_structured_formatter_includes_exceptions():
    """Exception tracebacks are serialized."""
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            "configcanon.test", logging.ERROR, __file__, 20, "failed", None, None
        )
        record.exc_info = sys.exc_info()

    data = json.loads(StructuredFormatter().format(record))

    assert "ValueError: boom" in data["exception"]


def test_configure_logging_writes_json_to_stream():
    """configure_logging installs one JSON handler on the root logger."""
    stream = io.StringIO()
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level

    try:
        configure_logging("INFO", stream=stream)
        logging.getLogger("configcanon.test").info("hello", extra={"location": "velocity.toml"})

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)

    assert lines[-1]["message"] == "hello"
    assert lines[-1]["location"] == "velocity.toml"
