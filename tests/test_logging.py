"""Tests for the structured logging system (ceramics_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from ceramics_kernel.domain.catalog import PaymentMethod
from ceramics_kernel.exceptions import InvalidDateRangeError, RepositoryUnavailableError
from ceramics_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Each test starts from an unconfigured ceramics logger."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def log_lines():
    """Configure logging into a buffer; call the fixture value to parse it."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler)

    def _lines() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return _lines


log = get_logger("tests.logging")


# ---------------------------------------------------------------------------
# StructuredFormatter
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """One JSON object per record."""

    def test_envelope(self, log_lines):
        log.info("report_generated")

        (record,) = log_lines()
        assert record["level"] == "INFO"
        assert record["message"] == "report_generated"
        assert record["logger"] == "ceramics.tests.logging"
        assert record["ts"].endswith("+00:00")

    def test_extra_fields_included(self, log_lines):
        log.info("top_products_generated", extra={"line_count": 3, "limit": 10})

        (record,) = log_lines()
        assert record["line_count"] == 3
        assert record["limit"] == 10

    def test_context_fields_included(self, log_lines):
        LogContext.set(request_id="req-1", report_type="trial_balance")
        log.info("trial_balance_generated")

        (record,) = log_lines()
        assert record["request_id"] == "req-1"
        assert record["report_type"] == "trial_balance"

    def test_absent_context_fields_omitted(self, log_lines):
        log.info("bare_message")

        (record,) = log_lines()
        assert not {"request_id", "report_type", "actor_id"} & set(record)

    def test_plain_exception(self, log_lines):
        try:
            raise ValueError("boom")
        except ValueError:
            log.error("failed", exc_info=True)

        (record,) = log_lines()
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "exc_code" not in record
        assert "Traceback" in record["traceback"]

    def test_typed_exception_attributes(self, log_lines):
        try:
            raise InvalidDateRangeError(date(2024, 2, 1), date(2024, 1, 1))
        except InvalidDateRangeError:
            log.error("range_rejected", exc_info=True)

        (record,) = log_lines()
        assert record["exc_code"] == "INVALID_DATE_RANGE"
        assert record["exc_start"] == "2024-02-01"
        assert record["exc_end"] == "2024-01-01"

    def test_repository_failure_attributes(self, log_lines):
        try:
            raise RepositoryUnavailableError("list_sales", "connection reset")
        except RepositoryUnavailableError:
            log.error("report_failed", exc_info=True)

        (record,) = log_lines()
        assert record["exc_code"] == "REPOSITORY_UNAVAILABLE"
        assert record["exc_operation"] == "list_sales"
        assert record["exc_reason"] == "connection reset"

    def test_domain_values_serialized(self, log_lines):
        sale_id = uuid4()
        log.info(
            "with_values",
            extra={
                "sale_id": sale_id,
                "amount": Decimal("12.50"),
                "day": date(2024, 3, 1),
                "account": PaymentMethod.BBJ,
            },
        )

        (record,) = log_lines()
        assert record["sale_id"] == str(sale_id)
        assert record["amount"] == "12.50"
        assert record["day"] == "2024-03-01"
        assert record["account"] == "bbj"

    def test_default_level_drops_debug(self, log_lines):
        log.info("first")
        log.warning("second", extra={"k": "v"})
        log.debug("third")

        assert [r["message"] for r in log_lines()] == ["first", "second"]


# ---------------------------------------------------------------------------
# LogContext
# ---------------------------------------------------------------------------


class TestLogContext:

    def test_set_and_get(self):
        LogContext.set(request_id="x", report_type="y")

        assert LogContext.get_all() == {"request_id": "x", "report_type": "y"}

    def test_set_ignores_none(self):
        LogContext.set(actor_id="operator")
        LogContext.set(actor_id=None, request_id="r")

        assert LogContext.get_all() == {"actor_id": "operator", "request_id": "r"}

    def test_clear(self):
        LogContext.set(request_id="x", report_type="y", actor_id="z")
        LogContext.clear()

        assert LogContext.get_all() == {}

    def test_bind_restores_previous_value(self):
        LogContext.set(report_type="outer")

        with LogContext.bind(report_type="inner"):
            assert LogContext.get_all()["report_type"] == "inner"

        assert LogContext.get_all()["report_type"] == "outer"

    def test_bind_restores_absence(self):
        with LogContext.bind(report_type="sales_dashboard"):
            assert LogContext.get_all() == {"report_type": "sales_dashboard"}

        assert LogContext.get_all() == {}

    def test_bind_restores_on_exception(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(report_type="trial_balance"):
                raise RuntimeError("boom")

        assert LogContext.get_all() == {}

    def test_nested_binds(self):
        with LogContext.bind(request_id="req-1"):
            with LogContext.bind(report_type="top_products"):
                assert LogContext.get_all() == {
                    "request_id": "req-1", "report_type": "top_products",
                }
            assert LogContext.get_all() == {"request_id": "req-1"}

    def test_bind_ignores_unknown_fields(self):
        with LogContext.bind(unknown_field="x", actor_id="a"):
            assert LogContext.get_all() == {"actor_id": "a"}


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:

    def test_idempotent(self):
        first = logging.StreamHandler(StringIO())
        second = logging.StreamHandler(StringIO())

        configure_logging(handler=first)
        configure_logging(handler=second)

        assert logging.getLogger("ceramics").handlers == [first]

    def test_does_not_propagate_to_root(self):
        configure_logging(handler=logging.StreamHandler(StringIO()))

        assert logging.getLogger("ceramics").propagate is False

    def test_accepts_level_name(self):
        configure_logging(level="DEBUG", handler=logging.StreamHandler(StringIO()))

        assert logging.getLogger("ceramics").level == logging.DEBUG

    def test_child_loggers_share_configuration(self):
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        configure_logging(level=logging.DEBUG, handler=handler)

        get_logger("engines.trial_balance").debug("trial_balance_computed")

        record = json.loads(stream.getvalue())
        assert record["logger"] == "ceramics.engines.trial_balance"

    def test_reset_clears_handlers(self):
        configure_logging(handler=logging.StreamHandler(StringIO()))

        reset_logging()

        assert logging.getLogger("ceramics").handlers == []
        assert logging.getLogger("ceramics").level == logging.WARNING
