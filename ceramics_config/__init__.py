"""
ceramics_config -- single public entrypoint for analytics configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``AnalyticsConfigSet``.

Architecture position:
    Configuration -- sits above ``ceramics_kernel`` and beside
    ``ceramics_modules``.  The kernel and engines never import it; the
    caller hands ``config_set.reporting`` to ``ReportingConfig.from_dict``.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``ValueError`` / ``KeyError`` -- schema validation failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``CERAMICS_CONFIG_TRACE`` log entry with the config_id, version and
    checksum.
"""

from __future__ import annotations

import os
from pathlib import Path

from ceramics_config.loader import compute_checksum, load_config_set, load_yaml_file
from ceramics_config.schema import AnalyticsConfigSet
from ceramics_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default configuration set shipped with the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"

# Environment variable that overrides the configured database URL
DATABASE_URL_ENV = "CERAMICS_DATABASE_URL"


def get_active_config(config_path: Path | str | None = None) -> AnalyticsConfigSet:
    """Load the active configuration set.

    Args:
        config_path: Override path to a YAML configuration set.
            Defaults to ceramics_config/sets/default.yaml.

    Returns:
        AnalyticsConfigSet. ``database_url`` is replaced by
        ``$CERAMICS_DATABASE_URL`` when that variable is set.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the configuration set is invalid.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    config_set = load_config_set(path, os.environ.get(DATABASE_URL_ENV) or None)

    _logger.info(
        "CERAMICS_CONFIG_TRACE",
        extra={
            "trace_type": "CERAMICS_CONFIG_TRACE",
            "config_set_id": config_set.config_id,
            "config_set_version": config_set.version,
            "checksum": config_set.checksum,
            "source_path": str(path),
            "reporting_keys": sorted(config_set.reporting),
        },
    )
    return config_set


__all__ = [
    "AnalyticsConfigSet",
    "DATABASE_URL_ENV",
    "DEFAULT_CONFIG_PATH",
    "compute_checksum",
    "get_active_config",
    "load_yaml_file",
]
