"""
Result export: terminal tables and JSON/TOML documents.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import tomli_w
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qbench.core.duration import format_duration
from qbench.errors import ExportFormatError
from qbench.models.results import (
    BenchmarkOutcome,
    BenchmarkRunResult,
    OutcomeStatus,
    SuccessOutcome,
)

_STATUS_STYLE = {
    OutcomeStatus.SUCCESS: "green",
    OutcomeStatus.FAILURE: "red",
    OutcomeStatus.PRE_SCRIPT_FAILURE: "red",
    OutcomeStatus.POST_SCRIPT_FAILURE: "yellow",
}


def build_table(outcome: BenchmarkOutcome) -> Table:
    """Build a rich table for one benchmark."""
    table = Table(title=escape(outcome.name), title_justify="left")
    table.add_column("Revision", style="bold")
    table.add_column("Status")
    table.add_column("Iterations", justify="right")
    table.add_column("Avg Query", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Pre Script", justify="right")
    table.add_column("Post Script", justify="right")
    table.add_column("Error", overflow="fold")

    fastest = outcome.fastest()
    for rev in outcome.revision_outcomes:
        status = OutcomeStatus(rev.status)
        label = f"[{_STATUS_STYLE[status]}]{status.value}[/]"
        if isinstance(rev, SuccessOutcome):
            avg = format_duration(rev.average_duration)
            if fastest is not None and rev is fastest and len(outcome.successes()) > 1:
                avg = f"[bold green]{avg}[/]"
            table.add_row(
                escape(rev.revision_name),
                label,
                str(rev.iterations),
                avg,
                format_duration(rev.min_duration),
                format_duration(rev.max_duration),
                format_duration(rev.pre_script_duration),
                format_duration(rev.post_script_duration),
                "",
            )
        else:
            table.add_row(
                escape(rev.revision_name),
                label,
                *(["-"] * 6),
                escape(rev.error),
            )
    return table


def render_table(
    result: BenchmarkRunResult, console: Optional[Console] = None
) -> None:
    """Print one table per benchmark."""
    console = console or Console()
    if not result.results:
        console.print("No benchmarks were run.")
        return
    for outcome in result.results:
        console.print(build_table(outcome))


def to_dict(result: BenchmarkRunResult) -> dict[str, Any]:
    """Serializable form with ``_ns`` duration fields."""
    return result.model_dump(mode="json", by_alias=True)


def to_json(result: BenchmarkRunResult, indent: int = 2) -> str:
    return json.dumps(to_dict(result), indent=indent) + "\n"


def to_toml(result: BenchmarkRunResult) -> str:
    return tomli_w.dumps(to_dict(result))


WRITERS: dict[str, Callable[[BenchmarkRunResult], str]] = {
    ".json": to_json,
    ".toml": to_toml,
}


def write_results(result: BenchmarkRunResult, path: str | Path) -> Path:
    """
    Write results to ``path``; the format follows the extension.

    Raises:
        ExportFormatError: Unsupported extension or unwritable path
    """
    path = Path(path)
    writer = WRITERS.get(path.suffix.lower())
    if writer is None:
        raise ExportFormatError(
            f"Unsupported export format '{path.suffix or path.name}' "
            f"(expected one of {', '.join(sorted(WRITERS))})"
        )
    try:
        path.write_text(writer(result), encoding="utf-8")
    except OSError as e:
        raise ExportFormatError(f"Could not write {path}: {e}") from e
    return path
