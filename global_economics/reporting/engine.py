"""
Report engine: per-cell queries assembled into grid reports.

Two report shapes share one grid layout with transposed roles:

- Region report — rows are the metric catalog, columns the selected years.
- Metric report — rows are the region catalog, columns the selected years.

Cell values are computed on demand, one path query per cell, and never
cached: the document is immutable, so recomputation is always consistent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from global_economics.catalog.builder import resolve_label, value_path
from global_economics.config import ReportConfig
from global_economics.models.catalog import Metric, Region
from global_economics.models.year_range import YearRange
from global_economics.reporting.formatters import format_cell, format_grid
from global_economics.store.document import DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridRow:
    label: str
    cells: tuple[str, ...]


@dataclass
class GridReport:
    """A titled table: one labelled row per entity, one column per year."""

    title: str
    label_header: str
    label_width: int
    years: list[int]
    rows: list[GridRow] = field(default_factory=list)
    rule_width: Optional[int] = None

    def render(self, cell_width: int = 8, max_line_width: int = 100) -> str:
        return format_grid(self, cell_width=cell_width, max_line_width=max_line_width)


class ReportEngine:
    """Builds region and metric reports from the document store."""

    def __init__(self, store: DocumentStore, config: ReportConfig | None = None) -> None:
        self.store = store
        self.config = config or ReportConfig()

    def cell_value(self, region: Region, year: int, metric: Metric) -> str:
        """Formatted value for one cell, or ``-`` when missing/non-numeric."""
        return format_cell(self.store.query(value_path(region, year, metric)))

    def metric_label(self, metric: Metric) -> str:
        return resolve_label(self.store, metric)

    def region_report(
        self,
        region: Region,
        metrics: Sequence[Metric],
        year_range: YearRange,
    ) -> GridReport:
        """All metrics for one region across the year range."""
        years = year_range.years
        report = GridReport(
            title=f"Economic Information for {region.name}",
            rule_width=len(region.name) + 31,
            label_header="Economic Metric",
            label_width=self.config.metric_label_width,
            years=years,
        )
        for metric in metrics:
            cells = tuple(self.cell_value(region, year, metric) for year in years)
            report.rows.append(GridRow(self.metric_label(metric), cells))
        logger.debug("Region report rid=%s: %d row(s) x %d year(s)", region.rid, len(report.rows), len(years))
        return report

    def metric_report(
        self,
        metric: Metric,
        regions: Sequence[Region],
        year_range: YearRange,
    ) -> GridReport:
        """One metric for every region across the year range."""
        years = year_range.years
        label = self.metric_label(metric)
        report = GridReport(
            title=f"{label} By Region",
            rule_width=len(label) + 11,
            label_header="Region",
            label_width=self.config.region_label_width,
            years=years,
        )
        for region in regions:
            cells = tuple(self.cell_value(region, year, metric) for year in years)
            report.rows.append(GridRow(region.name, cells))
        logger.debug("Metric report %s: %d row(s) x %d year(s)", metric.key, len(report.rows), len(years))
        return report

    def render(self, report: GridReport) -> str:
        """Render ``report`` with the configured widths."""
        return report.render(
            cell_width=self.config.cell_width,
            max_line_width=self.config.max_line_width,
        )
