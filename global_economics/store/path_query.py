"""
Path queries over the economics document.

The grammar is small: it covers exactly the access pattern of
the dataset and nothing more::

    path      := ("/" step)+ ["/" "@" NAME]
    step      := NAME ["[" "@" NAME "=" literal "]"]
    literal   := "'" chars "'" | '"' chars '"'

Paths are always anchored at the document root.  Inside a literal, the
enclosing quote character is written doubled (``'O''Brien'``).  Use
``quote_literal()`` / ``build_path()`` to compose queries from runtime values
so that embedded quotes can never break a filter.

Example::

    /global_economies/region[@rid='BRA']/year[@yid='2019']/inflation/@consumer_prices_percent

Parsing is cached: report rendering issues one query per grid cell, and the
same cell paths recur every time a report is redrawn.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")
_QUOTES = ("'", '"')


class PathQueryError(ValueError):
    """Raised when a path expression does not conform to the grammar."""


@dataclass(frozen=True)
class Predicate:
    """Single attribute-equality filter: ``[@attribute='value']``."""

    attribute: str
    value: str


@dataclass(frozen=True)
class Step:
    """One child-element selector, optionally filtered."""

    tag: str
    predicate: Optional[Predicate] = None


@dataclass(frozen=True)
class PathQuery:
    """A parsed path: element steps from the root, then an optional attribute."""

    steps: tuple[Step, ...]
    attribute: Optional[str] = None

    def __str__(self) -> str:
        parts = []
        for step in self.steps:
            text = step.tag
            if step.predicate is not None:
                text += f"[@{step.predicate.attribute}={quote_literal(step.predicate.value)}]"
            parts.append(text)
        if self.attribute is not None:
            parts.append(f"@{self.attribute}")
        return "/" + "/".join(parts)


# ── Literals / composition ────────────────────────────────────────────────────


def quote_literal(value: str) -> str:
    """Return ``value`` as a single-quoted literal with embedded quotes doubled."""
    return "'" + value.replace("'", "''") + "'"


StepSpec = Union[str, tuple[str, str, str]]


def build_path(*steps: StepSpec, attribute: Optional[str] = None) -> str:
    """Compose a path expression from step specs.

    Args:
        *steps:    Either a bare tag name, or ``(tag, attribute, value)`` for a
                   filtered step.  ``value`` may contain any characters.
        attribute: Optional trailing attribute name.

    Returns:
        Path text accepted by ``parse_path()``.

    Raises:
        PathQueryError: If a tag or attribute name is not a valid name.
    """
    if not steps:
        raise PathQueryError("A path needs at least one element step.")

    parts: list[str] = []
    for item in steps:
        if isinstance(item, str):
            parts.append(_checked_name(item))
        else:
            tag, attr, value = item
            parts.append(
                f"{_checked_name(tag)}[@{_checked_name(attr)}={quote_literal(value)}]"
            )
    if attribute is not None:
        parts.append("@" + _checked_name(attribute))
    return "/" + "/".join(parts)


def _checked_name(name: str) -> str:
    if not _NAME_RE.fullmatch(name):
        raise PathQueryError(f"Invalid name in path: {name!r}.")
    return name


# ── Parser ────────────────────────────────────────────────────────────────────


class _Scanner:
    """Cursor over the path text with grammar-level helpers."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def advance(self) -> None:
        self.pos += 1

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            raise self.error(f"expected '{ch}'")
        self.pos += 1

    def name(self) -> str:
        match = _NAME_RE.match(self.text, self.pos)
        if match is None:
            raise self.error("expected a name")
        self.pos = match.end()
        return match.group()

    def literal(self) -> str:
        quote = self.peek()
        if quote not in _QUOTES:
            raise self.error("expected a quoted literal")
        self.pos += 1
        chunks: list[str] = []
        while True:
            end = self.text.find(quote, self.pos)
            if end == -1:
                raise self.error("unterminated literal")
            chunks.append(self.text[self.pos:end])
            self.pos = end + 1
            if self.peek() == quote:
                # Doubled quote: literal quote character, keep scanning.
                chunks.append(quote)
                self.pos += 1
                continue
            return "".join(chunks)

    def error(self, message: str) -> PathQueryError:
        return PathQueryError(
            f"Invalid path {self.text!r} at position {self.pos}: {message}."
        )


@lru_cache(maxsize=4096)
def parse_path(text: str) -> PathQuery:
    """Parse a path expression into a ``PathQuery``.

    Raises:
        PathQueryError: If ``text`` is not anchored, uses unsupported syntax,
            or has trailing characters.
    """
    scanner = _Scanner(text)
    if scanner.peek() != "/":
        raise scanner.error("paths must be anchored at the root ('/')")

    steps: list[Step] = []
    attribute: Optional[str] = None

    while not scanner.at_end():
        scanner.expect("/")
        if scanner.peek() == "@":
            scanner.advance()
            attribute = scanner.name()
            break
        tag = scanner.name()
        predicate: Optional[Predicate] = None
        if scanner.peek() == "[":
            scanner.advance()
            scanner.expect("@")
            attr_name = scanner.name()
            scanner.expect("=")
            value = scanner.literal()
            scanner.expect("]")
            predicate = Predicate(attr_name, value)
        steps.append(Step(tag, predicate))

    if not scanner.at_end():
        raise scanner.error("attribute selection must be the last step")
    if not steps:
        raise scanner.error("at least one element step is required")

    return PathQuery(steps=tuple(steps), attribute=attribute)
