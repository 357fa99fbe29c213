"""
global_economics.settings — User settings persisted between runs.

Modules:
  year_range — YearRangeManager: policy validation, load/save of the year window.
"""
