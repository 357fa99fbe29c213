"""
In-memory document store.

The dataset is an XML file parsed once at startup into an immutable tree of
``Node`` objects.  ``DocumentStore`` owns that tree for the process lifetime
and answers path queries against it (see ``path_query``).

Query semantics
---------------
- Steps are evaluated breadth-wise from the root, preserving document order.
- A step that matches nothing short-circuits to "no result", never an error.
- ``query()`` returns at most one value: the first match in document order.
- Attribute text is returned verbatim; no numeric coercion happens here.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from global_economics.store.path_query import PathQuery, Step, parse_path

logger = logging.getLogger(__name__)


class DocumentNotFoundError(FileNotFoundError):
    """Raised when the document file does not exist."""


class DocumentParseError(ValueError):
    """Raised when the document file is not well-formed."""


@dataclass(frozen=True)
class Node:
    """One element of the document tree.

    Attributes:
        tag:        Element name.
        attributes: Read-only view of attribute name -> raw text.
        children:   Child elements in document order.
        text:       Element text content (before the first child), or ``""``.
    """

    tag: str
    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    children: tuple["Node", ...] = ()
    text: str = ""

    def matches(self, step: Step) -> bool:
        if self.tag != step.tag:
            return False
        if step.predicate is None:
            return True
        return self.attributes.get(step.predicate.attribute) == step.predicate.value


def _to_node(root: ET.Element) -> Node:
    # Post-order walk with an explicit stack; nesting depth is unbounded.
    built: dict[int, Node] = {}
    stack: list[tuple[ET.Element, bool]] = [(root, False)]
    while stack:
        element, expanded = stack.pop()
        if not expanded:
            stack.append((element, True))
            stack.extend((child, False) for child in element)
            continue
        built[id(element)] = Node(
            tag=element.tag,
            attributes=MappingProxyType(dict(element.attrib)),
            children=tuple(built.pop(id(child)) for child in element),
            text=element.text or "",
        )
    return built[id(root)]


class DocumentStore:
    """Read-only holder of the parsed document with path-query evaluation."""

    def __init__(self, root: Node, source: str = "<memory>") -> None:
        self._root = root
        self.source = source

    # ── Construction ─────────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: Path | str) -> "DocumentStore":
        """Parse the XML file at ``path``.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            DocumentParseError:    If the file is not well-formed XML.
        """
        path = Path(path)
        if not path.is_file():
            raise DocumentNotFoundError(f"Required data file '{path.name}' not found in {path.parent}.")
        try:
            tree = ET.parse(path)
        except ET.ParseError as exc:
            raise DocumentParseError(f"Could not parse {path}: {exc}") from exc
        store = cls(_to_node(tree.getroot()), source=str(path))
        logger.debug("Loaded document %s (root=<%s>)", path, store.root.tag)
        return store

    @classmethod
    def from_string(cls, text: str) -> "DocumentStore":
        """Parse XML from an in-memory string.

        Raises:
            DocumentParseError: If ``text`` is not well-formed XML.
        """
        try:
            element = ET.fromstring(text)
        except ET.ParseError as exc:
            raise DocumentParseError(f"Could not parse document text: {exc}") from exc
        return cls(_to_node(element))

    @property
    def root(self) -> Node:
        return self._root

    # ── Queries ──────────────────────────────────────────────────────────────

    def select(self, path: str) -> list[Node]:
        """Return every element matched by an element path, in document order.

        A trailing attribute step, if present, is ignored.

        Raises:
            PathQueryError: If ``path`` is malformed.
        """
        return self._evaluate(parse_path(path))

    def query(self, path: str) -> Optional[str]:
        """Evaluate a single-result path query.

        Returns:
            The attribute text for attribute paths, the element text for
            element paths, or ``None`` when nothing matches.

        Raises:
            PathQueryError: If ``path`` is malformed.  Well-formed paths never
                raise, whatever the document contains.
        """
        parsed = parse_path(path)
        nodes = self._evaluate(parsed)
        if parsed.attribute is None:
            return nodes[0].text if nodes else None
        for node in nodes:
            value = node.attributes.get(parsed.attribute)
            if value is not None:
                return value
        return None

    def _evaluate(self, parsed: PathQuery) -> list[Node]:
        first, *rest = parsed.steps
        nodes = [self._root] if self._root.matches(first) else []
        for step in rest:
            if not nodes:
                break
            nodes = [child for node in nodes for child in node.children if child.matches(step)]
        return nodes
