"""
Year range value type.

Only the ordering invariant (``start <= end``) is enforced here; the policy
bounds (min/max year, maximum span) are configurable and checked by
``YearRangeManager.validate()``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class YearRange(BaseModel):
    """Inclusive ``[start, end]`` window of years shown in reports."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def validate_order(self) -> "YearRange":
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not precede start ({self.start}).")
        return self

    @property
    def count(self) -> int:
        return self.end - self.start + 1

    @property
    def years(self) -> list[int]:
        """Years in ascending order."""
        return list(range(self.start, self.end + 1))

    def __str__(self) -> str:
        return f"{self.start} to {self.end}"
