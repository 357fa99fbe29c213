"""
global_economics.catalog — Region and metric catalogs.

Modules:
  builder — build_regions(), build_metrics(), resolve_label(), value_path().
"""
