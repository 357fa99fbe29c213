"""
Application controller.

``EconomicsApp`` owns all process-wide state: the loaded document, the
region and metric catalogs, and the current year range.  It is built once by
``EconomicsApp.bootstrap()`` and handed explicitly to the console session or
CLI command that needs it. There are no module-level caches.

Startup order:
  1. Load the data document (fatal on failure).
  2. Build the region and metric catalogs.
  3. Load the persisted year range (never fails; defaults silently).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from global_economics.catalog.builder import build_metrics, build_regions
from global_economics.config import AppConfig
from global_economics.models.catalog import Metric, Region
from global_economics.models.year_range import YearRange
from global_economics.reporting.engine import GridReport, ReportEngine
from global_economics.settings.year_range import YearRangeManager
from global_economics.store.document import DocumentStore

logger = logging.getLogger(__name__)


class EconomicsApp:
    """Single owner of the loaded dataset, catalogs and current year range."""

    def __init__(
        self,
        config: AppConfig,
        store: DocumentStore,
        years: YearRangeManager,
        year_range: Optional[YearRange] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.years = years
        self.regions: list[Region] = build_regions(store)
        self.metrics: list[Metric] = build_metrics()
        self.engine = ReportEngine(store, config.report)
        self.year_range: YearRange = year_range or years.default_range()
        self.year_range_defaulted = year_range is None

    @classmethod
    def bootstrap(
        cls,
        config: AppConfig,
        data_file: Optional[Path] = None,
    ) -> "EconomicsApp":
        """Load the dataset and persisted settings described by ``config``.

        Args:
            config:    Validated application config.
            data_file: Override for ``config.data.data_file``.

        Raises:
            DocumentNotFoundError: If the data file is missing.
            DocumentParseError:    If the data file is not well-formed.
        """
        store = DocumentStore.load(data_file or Path(config.data.data_file))
        years = YearRangeManager(config.years, Path(config.data.settings_file))
        year_range, defaulted = years.load_with_status()
        app = cls(config, store, years, year_range)
        app.year_range_defaulted = defaulted
        logger.info(
            "Ready: %d region(s), %d metric(s), years %s%s",
            len(app.regions),
            len(app.metrics),
            year_range,
            " (default)" if defaulted else "",
        )
        return app

    # ── Year range ───────────────────────────────────────────────────────────

    def set_year_range(self, start: int, end: int) -> bool:
        """Make ``[start, end]`` current and try to persist it.

        Returns:
            False (and leaves state unchanged) if the range violates the
            policy; True otherwise, even when persisting fails.
        """
        if not self.years.validate(start, end):
            return False
        self.year_range = YearRange(start=start, end=end)
        self.year_range_defaulted = False
        try:
            self.years.save(self.year_range)
        except OSError as exc:
            logger.warning("Could not persist year range %s: %s", self.year_range, exc)
        return True

    # ── Catalog lookups ──────────────────────────────────────────────────────

    def metric_label(self, metric: Metric) -> str:
        return self.engine.metric_label(metric)

    def find_region(self, key: str) -> Optional[Region]:
        """Look a region up by rid, display name (case-insensitive) or 1-based number."""
        key = key.strip()
        for region in self.regions:
            if region.rid == key:
                return region
        for region in self.regions:
            if region.name.casefold() == key.casefold():
                return region
        return _by_number(self.regions, key)

    def find_metric(self, key: str) -> Optional[Metric]:
        """Look a metric up by attribute name, ``category/attr`` key or 1-based number."""
        key = key.strip()
        for metric in self.metrics:
            if key in (metric.attr_name, metric.key):
                return metric
        return _by_number(self.metrics, key)

    # ── Reports ──────────────────────────────────────────────────────────────

    def region_report(self, region: Region) -> GridReport:
        return self.engine.region_report(region, self.metrics, self.year_range)

    def metric_report(self, metric: Metric) -> GridReport:
        return self.engine.metric_report(metric, self.regions, self.year_range)

    def render(self, report: GridReport) -> str:
        return self.engine.render(report)


def _by_number(items: list, key: str):
    if key.isdigit() and 1 <= int(key) <= len(items):
        return items[int(key) - 1]
    return None
