"""Rich consoles and output helpers for form results."""

import json
from typing import Any, Dict, List

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Messages and tables go to stderr; --json payloads go to stdout
console = Console(stderr=True)
stdout_console = Console()


def print_ok(msg: str) -> None:
    console.print(f"[green]✓[/green] {msg}")


def print_err(msg: str) -> None:
    console.print(f"[red]✗[/red] {msg}")


def to_payload(data: Any) -> Any:
    """JSON-ready form of a result model (other values pass through)."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return data


def output_result(data: Any, *, ctx: typer.Context, title: str = "") -> None:
    """Print a result model or mapping as JSON (stdout) or a panel (stderr)."""
    payload = to_payload(data)
    if ctx.obj.get("json"):
        stdout_console.print_json(data=payload)
        return

    formatted = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if title:
        console.print(Panel(formatted, title=title, border_style="blue"))
    else:
        console.print(formatted)


def output_table(rows: List[Dict[str, Any]], *, title: str = "") -> None:
    """Render rows as a Rich table on stderr; columns come from the first row."""
    if not rows:
        console.print("[dim]No fields[/dim]")
        return

    table = Table(title=title, show_lines=False)
    for column in rows[0]:
        table.add_column(column)
    for row in rows:
        table.add_row(*[str(row.get(column, "")) for column in rows[0]])
    console.print(table)


def output_errors(errors: Dict[str, List[str]], *, title: str = "Validation errors") -> None:
    """One table row per message, keyed by field path."""
    output_table(
        [{"path": path, "message": message} for path, messages in errors.items() for message in messages],
        title=title,
    )
