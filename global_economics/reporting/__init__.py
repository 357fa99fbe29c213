"""
global_economics.reporting — Grid reports over the economics document.

Modules:
  formatters — Fixed-width primitives (pad, truncate, rule, cell) and grid rendering.
  engine     — ReportEngine: region and metric reports built from per-cell queries.
  export     — CSV/JSON flat-file export of a rendered grid.
"""
