"""
Fixed-width text formatters for the console reports.

All formatters return plain strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Layout rules
------------
- Every year column has the same width (``cell_width``, 8 by default);
  widths are never negotiated per column.
- Numeric and sentinel cells are right-aligned.
- Row labels longer than the label column are cut with a trailing ``…``.
- Separator rules never exceed ``max_line_width`` (100 by default), however
  long a region name or metric label is.

Cell values
-----------
``format_cell()`` turns the raw attribute text into the displayed value::

    "3.14159" -> "3.14"
    ""        -> "-"       (blank)
    None      -> "-"       (no such node / attribute)
    "n/a"     -> "-"       (present but not a number)
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from global_economics.reporting.engine import GridReport

MISSING = "-"
ELLIPSIS = "…"

# Plain decimal notation only: no nan/inf, no digit separators, "." as point.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_CENT = Decimal("0.01")


# ── Primitives ────────────────────────────────────────────────────────────────


def pad_left(text: str, width: int) -> str:
    """Left-pad ``text`` with spaces to ``width``; no-op if already as wide."""
    if len(text) >= width:
        return text
    return " " * (width - len(text)) + text


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to at most ``width`` characters.

    Over-long text keeps its first ``width - 1`` characters followed by an
    ellipsis.  With ``width <= 1`` there is no room for the ellipsis, so the
    text is hard-cut.
    """
    if len(text) <= width:
        return text
    if width > 1:
        return text[: width - 1] + ELLIPSIS
    return text[:max(width, 0)]


def rule(content_width: int, max_width: int = 100) -> str:
    """Dash separator of ``min(max_width, content_width)`` characters."""
    return "-" * min(max_width, content_width)


def format_cell(raw: Optional[str]) -> str:
    """Render a raw attribute value as a two-decimal number or ``-``.

    Values whose magnitude is outside the decimal context's exponent range
    render as ``-`` rather than raising.
    """
    if raw is None:
        return MISSING
    text = raw.strip()
    if not text or not _DECIMAL_RE.fullmatch(text):
        return MISSING
    try:
        value = Decimal(text)
        with localcontext() as ctx:
            if value.adjusted() >= ctx.Emax:
                return MISSING
            ctx.prec = max(ctx.prec, value.adjusted() + 4)
            rendered = f"{value.quantize(_CENT, rounding=ROUND_HALF_UP):f}"
    except (InvalidOperation, ValueError):
        return MISSING
    if rendered.startswith("-") and not rendered.strip("-0."):
        rendered = rendered[1:]
    return rendered


# ── Grid ──────────────────────────────────────────────────────────────────────


def format_grid(
    report: "GridReport",
    cell_width: int = 8,
    max_line_width: int = 100,
) -> str:
    """Render a ``GridReport`` as a titled, fixed-width table.

    Layout::

        Economic Information for Brazil
        -------------------------------------

               Economic Metric    2019    2020    2021

           Consumer Prices (%)    3.73    3.21       -

    Args:
        report:         Grid produced by ``ReportEngine``.
        cell_width:     Width of every year column.
        max_line_width: Upper bound for the title separator rule, whose
                        length is ``report.rule_width`` or the title length.

    Returns:
        Multi-line string (no trailing newline).
    """
    label_width = report.label_width
    rule_width = report.rule_width if report.rule_width is not None else len(report.title)
    lines: list[str] = [
        report.title,
        rule(rule_width, max_line_width),
        "",
        pad_left(report.label_header, label_width)
        + "".join(pad_left(str(year), cell_width) for year in report.years),
        "",
    ]
    for row in report.rows:
        label = pad_left(truncate(row.label, label_width), label_width)
        lines.append(label + "".join(pad_left(cell, cell_width) for cell in row.cells))
    return "\n".join(lines)


def format_numbered_list(labels: list[str], indent: int = 0) -> str:
    """Render ``labels`` as a 1-based list with right-aligned numbers.

    ::

         9. Brazil
        10. Canada
    """
    digits = len(str(len(labels)))
    prefix = " " * indent
    return "\n".join(
        f"{prefix}{pad_left(str(i), digits)}. {label}" for i, label in enumerate(labels, 1)
    )
