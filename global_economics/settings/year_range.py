"""
Year-range policy and persistence.

The persisted settings file is a small XML document::

    <user_year_range>
      <start>2017</start>
      <end>2021</end>
    </user_year_range>

Load policy
-----------
``load()`` never raises.  A missing, unreadable, malformed or
policy-violating file yields the configured default range; the reason is
logged at INFO and surfaced through ``load_with_status()`` for callers that
want to know.  Losing a bad persisted value is acceptable; crashing on one
is not.

Save policy
-----------
``save()`` rewrites the whole file in place.  It raises ``OSError`` on
failure; persistence is best-effort, so the controller catches and logs it.
A file corrupted by an interrupted write is simply defaulted on next load.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from global_economics.config import YearsConfig
from global_economics.models.year_range import YearRange
from global_economics.store.document import DocumentStore

logger = logging.getLogger(__name__)

SETTINGS_ROOT_TAG = "user_year_range"


class YearRangeManager:
    """Validates year windows against the policy and persists them."""

    def __init__(self, policy: YearsConfig, settings_path: Path | str) -> None:
        self.policy = policy
        self.settings_path = Path(settings_path)

    # ── Policy ───────────────────────────────────────────────────────────────

    def validate(self, start: int, end: int) -> bool:
        """True when ``[start, end]`` satisfies the bounds and the span limit."""
        p = self.policy
        if start < p.min_year or start > p.max_year:
            return False
        if end < start or end > p.max_year:
            return False
        return end - start + 1 <= p.max_span

    def max_end_for(self, start: int) -> int:
        """Largest end year allowed for ``start``."""
        return min(self.policy.max_year, start + self.policy.max_span - 1)

    def default_range(self) -> YearRange:
        return YearRange(start=self.policy.default_start, end=self.policy.default_end)

    # ── Persistence ──────────────────────────────────────────────────────────

    def load(self) -> YearRange:
        """Return the persisted range, or the default if it cannot be used."""
        year_range, _ = self.load_with_status()
        return year_range

    def load_with_status(self) -> tuple[YearRange, bool]:
        """Return ``(range, was_defaulted)``.  Never raises."""
        path = self.settings_path
        if not path.is_file():
            logger.info("No year-range settings at %s; using default", path)
            return self.default_range(), True

        try:
            doc = DocumentStore.load(path)
            start_text = doc.query(f"/{SETTINGS_ROOT_TAG}/start")
            end_text = doc.query(f"/{SETTINGS_ROOT_TAG}/end")
            if start_text is None or end_text is None:
                raise ValueError("start/end element missing")
            start, end = int(start_text), int(end_text)
        except (OSError, ValueError) as exc:
            logger.info("Unreadable year-range settings %s (%s); using default", path, exc)
            return self.default_range(), True

        if not self.validate(start, end):
            logger.info(
                "Persisted year range %d-%d violates policy; using default", start, end
            )
            return self.default_range(), True

        return YearRange(start=start, end=end), False

    def save(self, year_range: YearRange) -> None:
        """Write ``year_range`` to the settings file.

        Raises:
            OSError: If the file cannot be written.
        """
        root = ET.Element(SETTINGS_ROOT_TAG)
        ET.SubElement(root, "start").text = str(year_range.start)
        ET.SubElement(root, "end").text = str(year_range.end)
        tree = ET.ElementTree(root)
        ET.indent(tree)

        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(self.settings_path, encoding="utf-8", xml_declaration=True)
        logger.debug("Saved year range %s to %s", year_range, self.settings_path)
