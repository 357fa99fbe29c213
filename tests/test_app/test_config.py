"""
Tests for global_economics.config — TOML loading, overrides and validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from global_economics.config import (
    AppConfig,
    LoggingConfig,
    ReportConfig,
    YearsConfig,
    load_config,
)

_ENV_VARS = (
    "GLOBAL_ECONOMICS_DATA_FILE",
    "GLOBAL_ECONOMICS_SETTINGS_FILE",
    "GLOBAL_ECONOMICS_LOG_LEVEL",
    "GLOBAL_ECONOMICS_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_toml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config" / "default.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ── Defaults / models ─────────────────────────────────────────────────────────

def test_defaults():
    cfg = AppConfig()
    assert (cfg.years.min_year, cfg.years.max_year, cfg.years.max_span) == (1970, 2021, 5)
    assert (cfg.years.default_start, cfg.years.default_end) == (2017, 2021)
    assert cfg.report.cell_width == 8
    assert cfg.report.max_line_width == 100


def test_default_range_must_satisfy_policy():
    with pytest.raises(ValidationError):
        YearsConfig(default_start=2010, default_end=2021)
    with pytest.raises(ValidationError):
        YearsConfig(max_year=2019)


def test_min_year_above_max_year_rejected():
    with pytest.raises(ValidationError):
        YearsConfig(min_year=2030, max_year=2020)


def test_zero_span_rejected():
    with pytest.raises(ValidationError):
        YearsConfig(max_span=0)


def test_bad_widths_rejected():
    with pytest.raises(ValidationError):
        ReportConfig(cell_width=0)


def test_log_level_normalized_and_checked():
    assert LoggingConfig(level="debug").level == "DEBUG"
    with pytest.raises(ValidationError):
        LoggingConfig(level="LOUD")


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        AppConfig().debug = True  # type: ignore[misc]


# ── load_config ───────────────────────────────────────────────────────────────

def test_load_config_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.toml")


def test_load_config_reads_sections(tmp_path: Path):
    path = _write_toml(
        tmp_path,
        """
[project]
debug = true

[data]
data_file = "elsewhere.xml"

[years]
max_span = 3
default_start = 2019

[report]
region_label_width = 30
""",
    )
    cfg = load_config(path)
    assert cfg.debug is True
    assert cfg.data.data_file == "elsewhere.xml"
    assert cfg.years.max_span == 3
    assert cfg.years.default_start == 2019
    assert cfg.report.region_label_width == 30


def test_load_config_local_override(tmp_path: Path):
    path = _write_toml(tmp_path, '[data]\ndata_file = "a.xml"\nsettings_file = "s.xml"\n')
    (path.parent / "local.toml").write_text('[data]\ndata_file = "b.xml"\n', encoding="utf-8")
    cfg = load_config(path)
    assert cfg.data.data_file == "b.xml"
    assert cfg.data.settings_file == "s.xml"


def test_load_config_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = _write_toml(tmp_path, "[logging]\nlevel = \"INFO\"\n")
    monkeypatch.setenv("GLOBAL_ECONOMICS_DATA_FILE", "env.xml")
    monkeypatch.setenv("GLOBAL_ECONOMICS_SETTINGS_FILE", "env_years.xml")
    monkeypatch.setenv("GLOBAL_ECONOMICS_LOG_LEVEL", "error")
    monkeypatch.setenv("GLOBAL_ECONOMICS_DEBUG", "yes")
    cfg = load_config(path)
    assert cfg.data.data_file == "env.xml"
    assert cfg.data.settings_file == "env_years.xml"
    assert cfg.logging.level == "ERROR"
    assert cfg.debug is True


def test_load_config_invalid_values(tmp_path: Path):
    path = _write_toml(tmp_path, "[years]\nmax_span = 0\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_shipped_default_config_is_valid():
    root = Path(__file__).resolve().parents[2]
    cfg = load_config(root / "config" / "default.toml")
    assert cfg.years == YearsConfig()
    assert cfg.report == ReportConfig()
