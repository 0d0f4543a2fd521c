"""
Configuration Loader (``ceramics_config.loader``).

Responsibility
--------------
Loads a YAML configuration set and parses it into an
``AnalyticsConfigSet``.  Callers go through
``ceramics_config.get_active_config()``; this module is the tooling
underneath it.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Invalid values  -> ``ValueError`` from the schema.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from ceramics_config.schema import AnalyticsConfigSet


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; an empty document yields ``{}``."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_config_set(
    data: dict[str, Any],
    database_url_override: str | None = None,
) -> AnalyticsConfigSet:
    """
    Parse an ``AnalyticsConfigSet`` from a loaded YAML document.

    Required keys: ``config_id``, ``version``.  ``database`` and
    ``reporting`` sections are optional.
    """
    database = data.get("database") or {}
    reporting = data.get("reporting") or {}
    if not isinstance(reporting, dict):
        raise ValueError("reporting section must be a mapping")

    return AnalyticsConfigSet(
        config_id=str(data["config_id"]),
        version=int(data["version"]),
        database_url=database_url_override or database.get("url"),
        log_level=str(data.get("log_level", "INFO")).upper(),
        reporting=dict(reporting),
        checksum=compute_checksum(data),
    )


def load_config_set(
    path: Path,
    database_url_override: str | None = None,
) -> AnalyticsConfigSet:
    """Load and parse the configuration set stored at ``path``."""
    return parse_config_set(load_yaml_file(path), database_url_override)
