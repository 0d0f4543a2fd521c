"""
AnalyticsConfigSet schema.

The human-authored configuration set for the analytics core: identity,
database location, log level and the reporting section.  YAML files are
parsed into this type by the loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class AnalyticsConfigSet:
    """
    One versioned configuration set.

    ``reporting`` holds the raw keys accepted by
    ``ReportingConfig.from_dict``.  ``checksum`` is the SHA-256 of the
    canonical JSON form of the source document.
    """

    config_id: str
    version: int
    database_url: str | None
    log_level: str = "INFO"
    reporting: dict[str, Any] = field(default_factory=dict)
    checksum: str = ""

    def __post_init__(self):
        if not self.config_id:
            raise ValueError("config_id is required")
        if self.version < 1:
            raise ValueError(f"version must be >= 1, got {self.version}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level: {self.log_level!r}")
