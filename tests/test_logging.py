"""Tests for structured logging emitted by the compiler."""

from __future__ import annotations

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from entityql import ColumnDescriptor, EntityShape, MissingPredicateError, OperationType
from entityql import compile_query
from entityql.logging_config import configure_logging, get_logger


def test_query_compiled_event_has_metadata_but_no_values(id_name_columns, settings):
    with capture_logs() as logs:
        compile_query(
            OperationType.UPDATE, EntityShape.SINGLE_ENTITY, id_name_columns, "T",
            values={"Id": 1, "Name": "secret"}, settings=settings,
        )
    events = [e for e in logs if e["event"] == "query_compiled"]
    assert len(events) == 1
    event = events[0]
    assert event["log_level"] == "debug"
    assert event["operation"] == "update"
    assert event["dialect"] == "sqlserver"
    assert event["table"] == "T"
    assert event["parameter_count"] == 2
    assert "secret" not in repr(logs)


def test_missing_predicate_logged_before_raising(settings):
    with capture_logs() as logs:
        with pytest.raises(MissingPredicateError):
            compile_query(
                OperationType.DELETE, EntityShape.SINGLE_ENTITY,
                [ColumnDescriptor(name="Name")], "T", settings=settings,
            )
    warnings = [e for e in logs if e["event"] == "missing_predicate"]
    assert warnings and warnings[0]["log_level"] == "warning"
    assert warnings[0]["table"] == "T"


def test_configure_logging_json(caplog):
    caplog.set_level(logging.DEBUG, logger="entityql")
    try:
        configure_logging("DEBUG", json=True)
        get_logger("entityql.tests").info("hello", answer=42)
        out = caplog.records[-1].getMessage()
        assert '"event": "hello"' in out
        assert '"answer": 42' in out
    finally:
        structlog.reset_defaults()


def test_configure_logging_defaults_to_settings_level(monkeypatch):
    monkeypatch.setenv("ENTITYQL_LOG_LEVEL", "warning")
    try:
        configure_logging()
        assert logging.getLogger("entityql").level == logging.WARNING
    finally:
        structlog.reset_defaults()
        logging.getLogger("entityql").setLevel(logging.NOTSET)
