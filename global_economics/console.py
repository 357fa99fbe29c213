"""
Interactive menu session.

Thin I/O layer over ``EconomicsApp``: every decision about data, validation
and layout lives in the controller and the reporting package.  Input and
output are injected (``read_line`` / ``echo``) so sessions can be scripted in
tests.

Commands (first non-blank character, case-insensitive):
  Y — adjust the year range
  R — region report
  M — metric report
  X — exit

Prompts loop until they get valid input; there is no way to back out of a
prompt chain.  End of input (Ctrl-D) ends the session like ``X``.
"""

from __future__ import annotations

import logging
from typing import Callable

import typer

from global_economics.app import EconomicsApp
from global_economics.reporting.formatters import format_numbered_list

logger = logging.getLogger(__name__)

TITLE = "World Economic Data"
FAREWELL = "All done!"

ReadLine = Callable[[str], str]
Echo = Callable[[str], None]


class ConsoleSession:
    """Menu loop bound to one ``EconomicsApp``."""

    def __init__(
        self,
        app: EconomicsApp,
        read_line: ReadLine = input,
        echo: Echo = typer.echo,
    ) -> None:
        self.app = app
        self.read_line = read_line
        self.echo = echo

    # ── Main loop ────────────────────────────────────────────────────────────

    def run(self) -> None:
        try:
            self._loop()
        except EOFError:
            self.echo("")
            self.echo(FAREWELL)

    def _loop(self) -> None:
        actions = {
            "Y": self.edit_year_range,
            "R": self.region_report,
            "M": self.metric_report,
        }
        while True:
            self._print_menu()
            choice = self.read_line("Your selection: ").strip()
            if not choice:
                continue
            command = choice[0].upper()
            self.echo("")
            if command == "X":
                self.echo(FAREWELL)
                return
            action = actions.get(command)
            if action is not None:
                action()
            self.echo("")

    def _print_menu(self) -> None:
        yr = self.app.year_range
        self.echo(TITLE)
        self.echo("=" * len(TITLE))
        self.echo("")
        self.echo(f"'Y' to adjust the range of years (currently {yr.start} to {yr.end})")
        self.echo("'R' to print a regional summary")
        self.echo("'M' to print a specific metric for all regions")
        self.echo("'X' to exit the program")

    # ── Actions ──────────────────────────────────────────────────────────────

    def edit_year_range(self) -> None:
        """Two-stage prompt: bounded start year, then any integer for the end year.

        The end year is validated after parsing because its upper bound depends
        on the chosen start year.
        """
        policy = self.app.years.policy
        start = self.prompt_int(
            f"Starting year ({policy.min_year} to {policy.max_year}): ",
            policy.min_year,
            policy.max_year,
        )
        max_end = self.app.years.max_end_for(start)
        while True:
            end = self.prompt_any_int(
                f"\nEnding year ({policy.min_year} to {policy.max_year}): "
            )
            if self.app.set_year_range(start, end):
                break
            self.echo(f"ERROR: Ending year must be an integer between {start} and {max_end}.")
        logger.info("Year range set to %s", self.app.year_range)

    def region_report(self) -> None:
        regions = self.app.regions
        if not regions:
            self.echo("No regions loaded.")
            return
        self.echo("Select a region by number as shown below...\n")
        self.echo(format_numbered_list([r.name for r in regions]))
        self.echo("")
        choice = self.prompt_int("Enter a region #: ", 1, len(regions))
        self.echo("")
        self.echo(self.app.render(self.app.region_report(regions[choice - 1])))

    def metric_report(self) -> None:
        metrics = self.app.metrics
        if not metrics:
            self.echo("No metrics loaded.")
            return
        self.echo("Select a metric by number as shown below...")
        self.echo(format_numbered_list([self.app.metric_label(m) for m in metrics], indent=2))
        self.echo("")
        choice = self.prompt_int("Enter a metric #: ", 1, len(metrics))
        self.echo("")
        self.echo(self.app.render(self.app.metric_report(metrics[choice - 1])))

    # ── Input helpers ────────────────────────────────────────────────────────

    def prompt_int(self, prompt: str, minimum: int, maximum: int) -> int:
        """Prompt until the reply is an integer in ``[minimum, maximum]``."""
        while True:
            value = _parse_int(self.read_line(prompt))
            if value is not None and minimum <= value <= maximum:
                return value
            self.echo(f"ERROR: Please enter an integer between {minimum} and {maximum}.")

    def prompt_any_int(self, prompt: str) -> int:
        """Prompt until the reply parses as an integer (no range check)."""
        while True:
            value = _parse_int(self.read_line(prompt))
            if value is not None:
                return value
            self.echo("ERROR: Please enter an integer value.")


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None
