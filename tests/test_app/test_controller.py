"""
Tests for global_economics.app — startup, year-range updates, lookups.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from global_economics.app import EconomicsApp
from global_economics.config import AppConfig, DataConfig
from global_economics.models.year_range import YearRange
from global_economics.store.document import DocumentNotFoundError, DocumentParseError


# ── bootstrap ──────────────────────────────────────────────────────────────────

def test_bootstrap_builds_catalogs(economics: EconomicsApp):
    assert [r.rid for r in economics.regions] == ["BRA", "CAN", "O'X"]
    assert len(economics.metrics) == 7
    assert economics.year_range == YearRange(start=2017, end=2021)
    assert economics.year_range_defaulted is True


def test_bootstrap_missing_data_file(tmp_path: Path):
    config = AppConfig(data=DataConfig(data_file=str(tmp_path / "nope.xml")))
    with pytest.raises(DocumentNotFoundError):
        EconomicsApp.bootstrap(config)


def test_bootstrap_malformed_data_file(tmp_path: Path):
    bad = tmp_path / "bad.xml"
    bad.write_text("<global_economies>", encoding="utf-8")
    config = AppConfig(data=DataConfig(data_file=str(bad)))
    with pytest.raises(DocumentParseError):
        EconomicsApp.bootstrap(config)


def test_bootstrap_data_file_override(app_config: AppConfig, tmp_path: Path):
    other = tmp_path / "other.xml"
    other.write_text("<global_economies><region rid='Z' rname='Zed'/></global_economies>", encoding="utf-8")
    economics = EconomicsApp.bootstrap(app_config, other)
    assert [r.name for r in economics.regions] == ["Zed"]


def test_bootstrap_restores_persisted_range(app_config: AppConfig):
    Path(app_config.data.settings_file).write_text(
        "<user_year_range><start>2000</start><end>2002</end></user_year_range>", encoding="utf-8"
    )
    economics = EconomicsApp.bootstrap(app_config)
    assert economics.year_range == YearRange(start=2000, end=2002)
    assert economics.year_range_defaulted is False


# ── set_year_range ─────────────────────────────────────────────────────────────

def test_set_year_range_persists(economics: EconomicsApp, app_config: AppConfig):
    assert economics.set_year_range(2019, 2021) is True
    assert economics.year_range == YearRange(start=2019, end=2021)
    reloaded = EconomicsApp.bootstrap(app_config)
    assert reloaded.year_range == YearRange(start=2019, end=2021)


def test_set_year_range_rejects_invalid(economics: EconomicsApp, app_config: AppConfig):
    assert economics.set_year_range(2010, 2020) is False
    assert economics.year_range == YearRange(start=2017, end=2021)
    assert not Path(app_config.data.settings_file).exists()


def test_set_year_range_save_failure_is_logged(
    app_config: AppConfig,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config = app_config.model_copy(
        update={"data": DataConfig(data_file=app_config.data.data_file, settings_file=str(blocker / "years.xml"))}
    )
    economics = EconomicsApp.bootstrap(config)
    with caplog.at_level("WARNING"):
        assert economics.set_year_range(2019, 2020) is True
    assert economics.year_range == YearRange(start=2019, end=2020)
    assert "Could not persist year range" in caplog.text


# ── lookups ────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("key,rid", [("BRA", "BRA"), ("canada", "CAN"), ("3", "O'X"), (" 1 ", "BRA")])
def test_find_region(economics: EconomicsApp, key: str, rid: str):
    region = economics.find_region(key)
    assert region is not None and region.rid == rid


@pytest.mark.parametrize("key", ["ZZZ", "0", "4", "", "-1"])
def test_find_region_misses(economics: EconomicsApp, key: str):
    assert economics.find_region(key) is None


@pytest.mark.parametrize(
    "key,attr",
    [("lending", "lending"), ("inflation/gdp_deflator_percent", "gdp_deflator_percent"), ("7", "modeled_ILO_estimate")],
)
def test_find_metric(economics: EconomicsApp, key: str, attr: str):
    metric = economics.find_metric(key)
    assert metric is not None and metric.attr_name == attr


def test_find_metric_miss(economics: EconomicsApp):
    assert economics.find_metric("gdp_growth") is None
    assert economics.find_metric("8") is None


# ── reports ────────────────────────────────────────────────────────────────────

def test_reports_follow_current_range(economics: EconomicsApp):
    economics.set_year_range(2019, 2021)
    brazil = economics.find_region("BRA")
    region = economics.region_report(brazil)
    assert region.years == [2019, 2020, 2021]
    assert region.rows[0].cells == ("3.73", "3.21", "-")

    metric = economics.metric_report(economics.metrics[0])
    assert len(metric.rows) == len(economics.regions)
    assert metric.years == [2019, 2020, 2021]
