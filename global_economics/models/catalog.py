"""
Catalog value types: regions and metrics.

``Region`` is read from the dataset; ``Metric`` is code-defined (see
``global_economics.catalog.builder.METRICS``).  Both are frozen value objects:
two instances with the same fields compare equal.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Region(BaseModel):
    """A geographic/economic entity.

    Attributes:
        rid:  Stable external key; matches the ``rid`` attribute in the data file.
        name: Display text (the ``rname`` attribute).
    """

    model_config = ConfigDict(frozen=True)

    rid: str
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Region name must not be blank.")
        return v


class Metric(BaseModel):
    """One measured economic attribute.

    Attributes:
        category:   Child element under each ``<year>`` (e.g. ``"inflation"``).
        attr_name:  Attribute on that element holding the value.
        label_path: Path query resolving to the human-readable label.
    """

    model_config = ConfigDict(frozen=True)

    category: str
    attr_name: str
    label_path: str

    @property
    def key(self) -> str:
        """``category/attr_name``, unique within the catalog."""
        return f"{self.category}/{self.attr_name}"
