"""Terminal output for the mcupload CLI.

Results go to stdout as a Rich table, key/value listing or JSON; status
messages and the upload progress bar go to stderr.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


class OutputFormat(Enum):
    """Formats accepted by ``--output``."""

    JSON = "json"
    TABLE = "table"

    @classmethod
    def from_string(cls, value: str) -> OutputFormat:
        return cls(value.lower())


def _label(key: str) -> str:
    return key.replace("_", " ").title()


def _cell(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, bool):
        return "Yes" if val else "No"
    if isinstance(val, (list, dict)):
        return json.dumps(val)
    return str(val)


# =============================================================================
# Results
# =============================================================================


def print_table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    *,
    title: str | None = None,
) -> None:
    """Print one table row per dict, showing only ``columns``."""
    if not rows:
        console.print("[dim]Nothing to show[/dim]")
        return

    table = Table(title=title, header_style="bold")
    for col in columns:
        table.add_column(_label(col))
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))

    console.print(table)


def print_key_value(data: dict[str, Any], *, title: str | None = None) -> None:
    """Print a dict as aligned ``Label  value`` lines."""
    if title:
        console.print(f"[bold]{title}[/bold]")

    width = max((len(_label(k)) for k in data), default=0)
    for key, value in data.items():
        if value is None:
            shown = "[dim]-[/dim]"
        elif isinstance(value, bool):
            shown = "[green]Yes[/green]" if value else "[red]No[/red]"
        elif isinstance(value, (list, dict)):
            shown = json.dumps(value, indent=2)
        else:
            shown = str(value)
        console.print(f"  {_label(key):<{width}}  {shown}")


def print_json(data: Any, *, indent: int = 2) -> None:
    """Print data as plain JSON, bypassing Rich markup."""
    print(json.dumps(data, indent=indent, default=str))


def print_output(
    data: Any,
    *,
    format: OutputFormat = OutputFormat.TABLE,
    columns: Sequence[str] | None = None,
    title: str | None = None,
) -> None:
    """Print a command result in the requested format.

    Args:
        data: A dict (one record) or a list of dicts.
        format: Output format.
        columns: Columns for table output of a list.
        title: Optional title.
    """
    if format == OutputFormat.JSON:
        print_json(data)
    elif isinstance(data, list) and columns:
        print_table(data, columns, title=title)
    elif isinstance(data, dict):
        print_key_value(data, title=title)
    else:
        print_json(data)


# =============================================================================
# Status messages
# =============================================================================


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {message}")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def create_progress() -> Progress:
    """Create a per-file progress display measured in bytes."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        DownloadColumn(),
        console=err_console,
    )
