"""Rich rendering of verification reports for the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from pactverify.domain.report import VerificationReport

STATUS_STYLES = {"passed": "green", "failed": "red", "errored": "magenta"}


def build_table(report: VerificationReport) -> Table:
    """One row per verified interaction, with failure details."""
    table = Table(title=report.summary(), title_justify="left", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Interaction")
    table.add_column("Provider state", style="cyan")
    table.add_column("Result")
    table.add_column("Details", overflow="fold")

    for number, outcome in enumerate(report.outcomes, start=1):
        status = outcome.status.value
        table.add_row(
            str(number),
            outcome.description,
            outcome.provider_state or "",
            Text(status, style=STATUS_STYLES[status]),
            "\n".join(outcome.details()),
        )
    return table


def print_report(report: VerificationReport, console: Console | None = None) -> None:
    """Print the report table to stdout (or the given console)."""
    console = console or Console()
    if not report.outcomes:
        console.print(report.summary())
        return
    console.print(build_table(report))
