"""
Catalog construction: the region list (from the document) and the metric
list (code-defined).

Both catalogs are built once at startup.  Their order is the canonical row
order of every report and the numbering shown in the selection menus.
"""

from __future__ import annotations

import logging

from global_economics.models.catalog import Metric, Region
from global_economics.store.document import DocumentStore
from global_economics.store.path_query import build_path

logger = logging.getLogger(__name__)

ROOT_TAG = "global_economies"
REGION_TAG = "region"
YEAR_TAG = "year"
LABELS_TAG = "labels"


def _metric(category: str, attr_name: str, label_group: str) -> Metric:
    return Metric(
        category=category,
        attr_name=attr_name,
        label_path=build_path(ROOT_TAG, LABELS_TAG, label_group, attribute=attr_name),
    )


# Label groups under <labels> use short names (interest, unemployment), not the
# category element names used under each <year>.
METRICS: tuple[Metric, ...] = (
    _metric("inflation", "consumer_prices_percent", "inflation"),
    _metric("inflation", "gdp_deflator_percent", "inflation"),
    _metric("interest_rates", "real", "interest"),
    _metric("interest_rates", "lending", "interest"),
    _metric("interest_rates", "deposit", "interest"),
    _metric("unemployment_rates", "national_estimate", "unemployment"),
    _metric("unemployment_rates", "modeled_ILO_estimate", "unemployment"),
)


def build_regions(store: DocumentStore) -> list[Region]:
    """Read every region under the root, in document order.

    Nodes with a blank or missing ``rname`` are skipped silently.  A repeated
    ``rid`` keeps the first occurrence and logs a warning.
    """
    regions: list[Region] = []
    seen: set[str] = set()
    for node in store.select(build_path(ROOT_TAG, REGION_TAG)):
        rid = node.attributes.get("rid", "")
        name = node.attributes.get("rname", "")
        if not name.strip():
            continue
        if rid in seen:
            logger.warning("Duplicate region rid=%r (%s) ignored", rid, name)
            continue
        seen.add(rid)
        regions.append(Region(rid=rid, name=name))
    logger.info("Loaded %d region(s) from %s", len(regions), store.source)
    return regions


def build_metrics() -> list[Metric]:
    """Return the fixed metric catalog in canonical order."""
    return list(METRICS)


def resolve_label(store: DocumentStore, metric: Metric) -> str:
    """Return the document label for ``metric``, else its attribute name."""
    label = store.query(metric.label_path)
    return label if label is not None else metric.attr_name


def value_path(region: Region, year: int, metric: Metric) -> str:
    """Path addressing one ``(region, year, metric)`` value."""
    return build_path(
        ROOT_TAG,
        (REGION_TAG, "rid", region.rid),
        (YEAR_TAG, "yid", str(year)),
        metric.category,
        attribute=metric.attr_name,
    )
