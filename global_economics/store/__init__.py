"""
global_economics.store — Read-only document store and path-query evaluator.

Modules:
  path_query — Path grammar: parsing, literal quoting, path composition.
  document   — XML loading into an immutable node tree; query evaluation.
"""

from global_economics.store.document import (
    DocumentNotFoundError,
    DocumentParseError,
    DocumentStore,
    Node,
)
from global_economics.store.path_query import PathQueryError, build_path, parse_path, quote_literal

__all__ = [
    "DocumentNotFoundError",
    "DocumentParseError",
    "DocumentStore",
    "Node",
    "PathQueryError",
    "build_path",
    "parse_path",
    "quote_literal",
]
