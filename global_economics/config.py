"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``GLOBAL_ECONOMICS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI, the console session and the controller all receive an ``AppConfig``
instance — never raw dicts or individual env var lookups scattered through
the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Filesystem paths for the dataset and the persisted year range."""

    model_config = ConfigDict(frozen=True)

    data_file: str = "data/global_economies.xml"
    settings_file: str = "data/user_year_range.xml"


class YearsConfig(BaseModel):
    """Year-window policy.

    ``default_start`` / ``default_end`` are used on first run and whenever the
    persisted settings file is missing or invalid, so they must satisfy the
    policy themselves.
    """

    model_config = ConfigDict(frozen=True)

    min_year: int = 1970
    max_year: int = 2021
    max_span: int = 5
    default_start: int = 2017
    default_end: int = 2021

    @field_validator("max_span")
    @classmethod
    def validate_span(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_span must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "YearsConfig":
        if self.min_year > self.max_year:
            raise ValueError(
                f"min_year ({self.min_year}) must not exceed max_year ({self.max_year})."
            )
        start, end = self.default_start, self.default_end
        if not (
            self.min_year <= start <= end <= self.max_year
            and end - start + 1 <= self.max_span
        ):
            raise ValueError(
                f"Default range {start}-{end} violates the year policy "
                f"({self.min_year}-{self.max_year}, span <= {self.max_span})."
            )
        return self


class ReportConfig(BaseModel):
    """Fixed column widths for the grid reports."""

    model_config = ConfigDict(frozen=True)

    cell_width: int = 8
    max_line_width: int = 100
    metric_label_width: int = 22
    region_label_width: int = 45

    @field_validator("cell_width", "max_line_width", "metric_label_width", "region_label_width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Column widths must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "WARNING"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    years: YearsConfig = YearsConfig()
    report: ReportConfig = ReportConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply GLOBAL_ECONOMICS_* env vars to the raw config dict.

    Supported overrides:
      GLOBAL_ECONOMICS_DATA_FILE      → raw["data"]["data_file"]
      GLOBAL_ECONOMICS_SETTINGS_FILE  → raw["data"]["settings_file"]
      GLOBAL_ECONOMICS_LOG_LEVEL      → raw["logging"]["level"]
      GLOBAL_ECONOMICS_DEBUG          → raw["debug"]
    """
    if data_file := os.environ.get("GLOBAL_ECONOMICS_DATA_FILE"):
        raw.setdefault("data", {})["data_file"] = data_file

    if settings_file := os.environ.get("GLOBAL_ECONOMICS_SETTINGS_FILE"):
        raw.setdefault("data", {})["settings_file"] = settings_file

    if log_level := os.environ.get("GLOBAL_ECONOMICS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("GLOBAL_ECONOMICS_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        years=YearsConfig(**raw.get("years", {})),
        report=ReportConfig(**raw.get("report", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
