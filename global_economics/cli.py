"""
Global Economics — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the dataset and persisted settings (``EconomicsApp.bootstrap``).
  4. Execute the action (menu session, one report, settings change).
  5. Report the result to stdout.

Install and run::

    pip install -e .
    global-economics --help
    global-economics run
    global-economics region-report BRA
    global-economics metric-report consumer_prices_percent --export out/cpi.csv
    global-economics set-years 2019 2021
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="global-economics",
    help="World economic data — console reports by region and by metric.",
    add_completion=False,
)

_CONFIG_OPTION = typer.Option(None, "--config", help="Path to TOML config file.")
_DATA_FILE_OPTION = typer.Option(
    None, "--data-file", help="Override the data file path from config."
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from global_economics.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from global_economics.utils.logging import configure_logging
    configure_logging(config.logging)


def _bootstrap_or_exit(config_path: Optional[str], data_file: Optional[str]):
    """Config + logging + dataset load; any startup failure exits with code 1."""
    from global_economics.app import EconomicsApp
    from global_economics.store.document import DocumentNotFoundError, DocumentParseError

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        return EconomicsApp.bootstrap(config, Path(data_file) if data_file else None)
    except DocumentNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
    except DocumentParseError as exc:
        typer.echo(f"[ERROR] Data file is not valid XML: {exc}", err=True)
    except Exception as exc:
        typer.echo(f"[ERROR] Unexpected error: {exc}", err=True)
    raise typer.Exit(code=1)


def _emit_report(economics, report, export: Optional[str]) -> None:
    from global_economics.reporting.export import export_report

    typer.echo(economics.render(report))
    if export:
        try:
            written = export_report(report, Path(export))
        except (ValueError, OSError) as exc:
            typer.echo(f"[ERROR] Export failed: {exc}", err=True)
            raise typer.Exit(code=1)
        typer.echo("")
        typer.echo(f"[OK] Exported {len(report.rows)} row(s) to {written}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("run")
def run(
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Start the interactive menu (Y = years, R = region, M = metric, X = exit)."""
    from global_economics.console import ConsoleSession

    economics = _bootstrap_or_exit(config_path, data_file)
    ConsoleSession(economics).run()


@app.command("region-report")
def region_report(
    region: str = typer.Argument(..., help="Region rid, display name, or list number."),
    export: Optional[str] = typer.Option(
        None, "--export", help="Also write the grid to a .csv or .json file."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Print every metric for one region over the current year range."""
    economics = _bootstrap_or_exit(config_path, data_file)
    match = economics.find_region(region)
    if match is None:
        typer.echo(f"[ERROR] Unknown region '{region}'. Try 'list-regions'.", err=True)
        raise typer.Exit(code=1)
    _emit_report(economics, economics.region_report(match), export)


@app.command("metric-report")
def metric_report(
    metric: str = typer.Argument(..., help="Metric attribute name or list number."),
    export: Optional[str] = typer.Option(
        None, "--export", help="Also write the grid to a .csv or .json file."
    ),
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Print one metric for every region over the current year range."""
    economics = _bootstrap_or_exit(config_path, data_file)
    match = economics.find_metric(metric)
    if match is None:
        typer.echo(f"[ERROR] Unknown metric '{metric}'. Try 'list-metrics'.", err=True)
        raise typer.Exit(code=1)
    _emit_report(economics, economics.metric_report(match), export)


@app.command("show-years")
def show_years(
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Print the year range reports will use."""
    economics = _bootstrap_or_exit(config_path, data_file)
    policy = economics.years.policy
    source = "default" if economics.year_range_defaulted else str(economics.years.settings_path)
    typer.echo(f"Year range: {economics.year_range} ({source})")
    typer.echo(
        f"  Policy: {policy.min_year} to {policy.max_year}, at most {policy.max_span} year(s)"
    )


@app.command("set-years")
def set_years(
    start: int = typer.Argument(..., help="First year of the range."),
    end: int = typer.Argument(..., help="Last year of the range (inclusive)."),
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Validate and persist a new year range."""
    economics = _bootstrap_or_exit(config_path, data_file)
    policy = economics.years.policy

    if not policy.min_year <= start <= policy.max_year:
        typer.echo(
            f"[ERROR] Starting year must be an integer between "
            f"{policy.min_year} and {policy.max_year}.",
            err=True,
        )
        raise typer.Exit(code=1)
    if not economics.set_year_range(start, end):
        typer.echo(
            f"[ERROR] Ending year must be an integer between "
            f"{start} and {economics.years.max_end_for(start)}.",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Year range set to {economics.year_range}.")


@app.command("list-regions")
def list_regions(
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Print the region catalog in report order."""
    from global_economics.reporting.formatters import format_numbered_list

    economics = _bootstrap_or_exit(config_path, data_file)
    if not economics.regions:
        typer.echo("No regions loaded.")
        return
    typer.echo(format_numbered_list([f"{r.name} [{r.rid}]" for r in economics.regions]))


@app.command("list-metrics")
def list_metrics(
    config_path: Optional[str] = _CONFIG_OPTION,
    data_file: Optional[str] = _DATA_FILE_OPTION,
) -> None:
    """Print the metric catalog with resolved labels."""
    from global_economics.reporting.formatters import format_numbered_list

    economics = _bootstrap_or_exit(config_path, data_file)
    typer.echo(
        format_numbered_list(
            [f"{economics.metric_label(m)} [{m.key}]" for m in economics.metrics]
        )
    )


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Data file:        {config.data.data_file}")
    typer.echo(f"  Settings file:    {config.data.settings_file}")
    typer.echo(
        f"  Year policy:      {config.years.min_year}-{config.years.max_year}, "
        f"span <= {config.years.max_span}"
    )
    typer.echo(f"  Default range:    {config.years.default_start}-{config.years.default_end}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
