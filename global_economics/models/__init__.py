"""
global_economics.models — Immutable value types shared across packages.

Modules:
  catalog    — Region, Metric.
  year_range — YearRange.
"""
