"""Structured Logging — formatter output and idempotent setup."""

import json
import logging

from pokedex.infrastructure import observability
from pokedex.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "pokedex.test", logging.INFO, __file__, 1, "Pokemon #%d created", (25,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_catalog_context():
    entry = json.loads(JSONFormatter().format(
        _record(pokemon_number=25, backend="memory", operation="insert"),
    ))
    assert entry["message"] == "Pokemon #25 created"
    assert entry["level"] == "INFO"
    assert (entry["pokemon_number"], entry["backend"], entry["operation"]) == (
        25, "memory", "insert",
    )


def test_json_formatter_omits_absent_context():
    entry = json.loads(JSONFormatter().format(_record()))
    assert "backend" not in entry
    assert "pokemon_number" not in entry


def test_text_formatter_appends_context():
    line = TextFormatter().format(_record(backend="sql"))
    assert line.endswith("Pokemon #25 created [backend=sql]")


def test_setup_logging_replaces_its_own_handler(monkeypatch):
    monkeypatch.setattr(observability, "_handler", None)
    before = list(logging.root.handlers)
    try:
        setup_logging("DEBUG", "text")
        setup_logging("INFO", "json")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in logging.root.handlers:
            if handler not in before:
                logging.root.removeHandler(handler)
