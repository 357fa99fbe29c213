"""
Shared pytest fixtures for the Global Economics test suite.

Provides:
  - ``sample_xml``: a small dataset covering the edge cases the reports must
    handle (blank values, missing nodes, non-numeric text, a blank region
    name, a missing label).
  - ``store``: that dataset loaded into a ``DocumentStore``.
  - ``data_file`` / ``app_config`` / ``economics``: the same dataset on disk
    with an ``AppConfig`` pointing every path into ``tmp_path``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from global_economics.app import EconomicsApp
from global_economics.config import AppConfig, DataConfig
from global_economics.store.document import DocumentStore

SAMPLE_XML = """<?xml version="1.0" encoding="utf-8"?>
<global_economies>
  <labels>
    <inflation consumer_prices_percent="Consumer Prices %" gdp_deflator_percent="GDP Deflator %" />
    <interest real="Real Interest Rate %" lending="Lending Rate %" deposit="Deposit Rate %" />
    <unemployment national_estimate="Unemployment (National) %" />
  </labels>
  <region rid="BRA" rname="Brazil">
    <year yid="2019">
      <inflation consumer_prices_percent="3.73" gdp_deflator_percent="4.2149" />
      <interest_rates real="32.71" lending="37.55" deposit="" />
      <unemployment_rates national_estimate="11.93" modeled_ILO_estimate="11.93" />
    </year>
    <year yid="2020">
      <inflation consumer_prices_percent="3.21" gdp_deflator_percent="n/a" />
      <interest_rates real="22.91" lending="28.05" deposit="" />
      <unemployment_rates national_estimate="13.69" modeled_ILO_estimate="13.69" />
    </year>
    <year yid="2021">
      <inflation gdp_deflator_percent="" />
    </year>
  </region>
  <region rid="NONAME" rname="   " />
  <region rid="CAN" rname="Canada">
    <year yid="2020">
      <inflation consumer_prices_percent="0.72" gdp_deflator_percent="0.98" />
    </year>
  </region>
  <region rid="O'X" rname="Quote Island">
    <year yid="2020">
      <inflation consumer_prices_percent="-0.5" />
    </year>
  </region>
</global_economies>
"""


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def store() -> DocumentStore:
    """The sample dataset, parsed in memory."""
    return DocumentStore.from_string(SAMPLE_XML)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """The sample dataset written to ``tmp_path/global_economies.xml``."""
    path = tmp_path / "global_economies.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")
    return path


@pytest.fixture
def app_config(tmp_path: Path, data_file: Path) -> AppConfig:
    """Default config with data and settings files inside ``tmp_path``."""
    return AppConfig(
        data=DataConfig(
            data_file=str(data_file),
            settings_file=str(tmp_path / "user_year_range.xml"),
        )
    )


@pytest.fixture
def economics(app_config: AppConfig) -> EconomicsApp:
    """A bootstrapped controller over the sample dataset."""
    return EconomicsApp.bootstrap(app_config)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI commands reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
