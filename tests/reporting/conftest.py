"""
Reporting-specific test fixtures.

Provides:
- ReportingConfig defaults
- A factory for ReportingService instances wired to an in-memory source and
  a deterministic clock
"""

import pytest

from ceramics_modules.reporting.config import ReportingConfig
from ceramics_modules.reporting.service import ReportingService
from tests.fakes import InMemoryReportingSource


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def make_service(deterministic_clock, reporting_config):
    """Factory building a ReportingService over an in-memory source."""

    def _make(source=None, config=None):
        source = source or InMemoryReportingSource()
        return ReportingService(
            source=source,
            clock=deterministic_clock,
            config=config or reporting_config,
        )

    return _make
