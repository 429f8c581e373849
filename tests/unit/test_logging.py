"""Unit tests for the structured logging helpers."""

import structlog

from admin_duplicatable.observability.logging import bound_duplication_context, get_logger


def test_context_binds_resource_and_strategy():
    with bound_duplication_context("posts", "save"):
        assert structlog.contextvars.get_contextvars() == {
            "resource": "posts",
            "strategy": "save",
        }

    assert "resource" not in structlog.contextvars.get_contextvars()


def test_context_is_merged_into_events():
    event = {"event": "duplication.succeeded", "source_id": 1}

    with bound_duplication_context("invoices", "form"):
        merged = structlog.contextvars.merge_contextvars(None, "info", dict(event))

    assert merged == {
        "event": "duplication.succeeded",
        "source_id": 1,
        "resource": "invoices",
        "strategy": "form",
    }


def test_nested_context_restores_outer_values():
    with bound_duplication_context("posts", "form"):
        with bound_duplication_context("invoices", "save"):
            assert structlog.contextvars.get_contextvars()["resource"] == "invoices"
        assert structlog.contextvars.get_contextvars()["resource"] == "posts"


def test_get_logger_returns_bindable_logger():
    assert hasattr(get_logger(__name__), "bind")
