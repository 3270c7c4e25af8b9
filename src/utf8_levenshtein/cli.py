from __future__ import annotations

"""CLI entrypoint for utf8-levenshtein."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import configure_logging, load_settings
from .distance import AllocationFailure, levenshtein
from .utils.codepoints import count_code_points

app = typer.Typer(help="Unicode-aware Levenshtein distance for UTF-8 text.")
console = Console()


@app.command()
def distance(
    first: str = typer.Argument(..., help="First string."),
    second: str = typer.Argument(..., help="Second string."),
    max_distance: Optional[int] = typer.Option(
        None, "--max", "-m", min=0, help="Stop once the distance reaches this value."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON object."),
) -> None:
    try:
        settings = load_settings(config_path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Invalid configuration[/red]: {exc}")
        raise typer.Exit(code=1)
    configure_logging(settings.log_level)

    cutoff = max_distance if max_distance is not None else settings.max_distance
    try:
        result = levenshtein(first, second, cutoff)
    except AllocationFailure as exc:
        console.print(f"[red]Out of memory[/red]: {exc}")
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps({"distance": result, "max": cutoff}, ensure_ascii=False))
        return

    table = Table(title="Levenshtein Distance")
    table.add_column("first")
    table.add_column("second")
    table.add_column("max", justify="right")
    table.add_column("distance", justify="right")
    table.add_row(first, second, "-" if cutoff is None else str(cutoff), str(result))
    console.print(table)


@app.command()
def count(text: str = typer.Argument(..., help="Text to measure.")) -> None:
    """Print the number of code points in TEXT."""

    typer.echo(str(count_code_points(text.encode("utf-8", "surrogatepass"))))


if __name__ == "__main__":  # pragma: no cover
    app()
