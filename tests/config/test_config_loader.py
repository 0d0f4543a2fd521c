"""
Tests for the configuration loader and get_active_config().

YAML documents are written to tmp_path so each test controls its input.
"""

import re

import pytest
import yaml

from ceramics_config import (
    DATABASE_URL_ENV,
    DEFAULT_CONFIG_PATH,
    compute_checksum,
    get_active_config,
    load_yaml_file,
)
from ceramics_config.loader import parse_config_set
from ceramics_modules.reporting.config import ReportingConfig


def _write(tmp_path, data, name="set.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_database_env(monkeypatch):
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)


class TestDefaultSet:

    def test_default_set_loads(self):
        config_set = get_active_config()

        assert config_set.config_id == "ceramica-canelas"
        assert config_set.version == 1
        assert config_set.log_level == "INFO"
        assert config_set.database_url == "sqlite:///ceramics.db"

    def test_reporting_section_builds_reporting_config(self):
        config_set = get_active_config(DEFAULT_CONFIG_PATH)

        config = ReportingConfig.from_dict(config_set.reporting)

        assert config == ReportingConfig()


class TestChecksum:

    def test_sha256_hex(self):
        checksum = get_active_config().checksum

        assert re.fullmatch(r"[0-9a-f]{64}", checksum)

    def test_independent_of_key_order(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_changes_with_content(self):
        assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})


class TestLoading:

    def test_empty_document_is_empty_dict(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_yaml_file(path) == {}

    def test_minimal_set(self, tmp_path):
        path = _write(tmp_path, {"config_id": "local", "version": 2, "log_level": "debug"})

        config_set = get_active_config(path)

        assert config_set.config_id == "local"
        assert config_set.version == 2
        assert config_set.log_level == "DEBUG"
        assert config_set.database_url is None
        assert config_set.reporting == {}

    def test_environment_overrides_database_url(self, tmp_path, monkeypatch):
        path = _write(tmp_path, {
            "config_id": "local", "version": 1,
            "database": {"url": "sqlite:///file.db"},
        })
        monkeypatch.setenv(DATABASE_URL_ENV, "postgresql://reports@db/ceramics")

        assert get_active_config(path).database_url == "postgresql://reports@db/ceramics"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "missing.yaml")


class TestValidation:

    def test_missing_config_id(self):
        with pytest.raises(KeyError):
            parse_config_set({"version": 1})

    @pytest.mark.parametrize("data", [
        {"config_id": "x", "version": 0},
        {"config_id": "", "version": 1},
        {"config_id": "x", "version": 1, "log_level": "LOUD"},
        {"config_id": "x", "version": 1, "reporting": ["not", "a", "mapping"]},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            parse_config_set(data)


class TestConfigTrace:

    def test_trace_logged(self, tmp_path, captured_logs):
        path = _write(tmp_path, {
            "config_id": "local", "version": 3, "reporting": {"ranking_limit": 5},
        })

        config_set = get_active_config(path)

        (trace,) = [r for r in captured_logs() if r["message"] == "CERAMICS_CONFIG_TRACE"]
        assert trace["config_set_id"] == "local"
        assert trace["config_set_version"] == 3
        assert trace["checksum"] == config_set.checksum
        assert trace["reporting_keys"] == ["ranking_limit"]
