"""
Flat-file export of grid reports.

All functions write to disk and return the written ``Path``.

A grid flattens to one record per row: the row label under the report's
label header, then one column per year holding the rendered cell text
(``-`` for missing values, exactly as shown on screen).
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from global_economics.reporting.engine import GridReport


def grid_to_records(report: GridReport) -> list[dict]:
    """Flatten ``report`` into row dicts keyed by label header and year."""
    return [
        {report.label_header: row.label, **{str(y): c for y, c in zip(report.years, row.cells)}}
        for row in report.rows
    ]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and not fieldnames:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    return path


def export_report(report: GridReport, path: Path) -> Path:
    """Export ``report`` as CSV or JSON depending on the file suffix.

    JSON output keeps the title and year list alongside the rows.

    Raises:
        ValueError: If the suffix is neither ``.csv`` nor ``.json``.
    """
    suffix = path.suffix.lower()
    records = grid_to_records(report)
    if suffix == ".csv":
        fieldnames = [report.label_header] + [str(y) for y in report.years]
        return export_to_csv(records, path, fieldnames=fieldnames)
    if suffix == ".json":
        return export_to_json(
            {"title": report.title, "years": report.years, "rows": records}, path
        )
    raise ValueError(f"Unsupported export format '{suffix}'. Use .csv or .json.")
