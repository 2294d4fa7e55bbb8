# file: src/greenwindow/cli.py
from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import GreenWindowConfig
from .tasks import GreenWindowResult, process_weis_data
from .weis_api import WeisFetchError, fetch_weis_feed, load_feed_file

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


def _strip_ipykernel_args(argv: list[str]) -> list[str]:
    """Jupyter/ipykernel injects `-f <connection_file>` into sys.argv."""
    out = [argv[0]]
    i = 1
    while i < len(argv):
        a = argv[i]
        if a in ("-f", "--f"):
            i += 2  # skip flag + value
            continue
        if a.startswith("--f="):
            i += 1
            continue
        out.append(a)
        i += 1
    return out


def _parse_now(value: str) -> pd.Timestamp:
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError) as exc:
        raise typer.BadParameter(f"not an ISO 8601 timestamp: {value!r}", param_hint="--now") from exc
    if pd.isna(ts):
        raise typer.BadParameter(f"not an ISO 8601 timestamp: {value!r}", param_hint="--now")
    return ts


def _print_summary(result: GreenWindowResult) -> None:
    style = {"green": "green", "carbon": "red"}.get(result.status_box.status, "yellow")
    console.print(f"[{style}]{result.status_box.text}[/{style}]")
    console.print(result.green_window.text)
    console.print(result.updated_display)

    table = Table(title="Clean Energy Calendar")
    table.add_column("Date", style="cyan")
    table.add_column("Day", style="green")
    table.add_column("Night", style="blue")

    for day in result.calendar:
        day_cell = f"[bold]{day.day_ranges}[/bold]" if day.day_is_good else day.day_ranges
        night_cell = f"[bold]{day.night_ranges}[/bold]" if day.night_is_good else day.night_ranges
        table.add_row(f"{day.weekday_short} {day.iso_date}", day_cell, night_cell)

    console.print(table)
    if result.threshold is not None:
        console.print(f"threshold={result.threshold:.4f} intervals={result.interval_count}")


@app.command()
def run(
    feed_file: Optional[str] = typer.Option(None, help="Read the feed from a saved JSON file"),
    now: Optional[str] = typer.Option(None, help="Reference instant (ISO 8601), default: current time"),
    timezone_name: Optional[str] = typer.Option(None, "--timezone", help="Civil timezone override"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON payload"),
):
    reference_instant = _parse_now(now) if now else None

    cfg = GreenWindowConfig.from_env()
    if timezone_name:
        cfg = replace(cfg, local_timezone=timezone_name)

    try:
        feed = load_feed_file(feed_file) if feed_file else fetch_weis_feed(cfg)
    except WeisFetchError as exc:
        console.print(f"[red]Download failed. {escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    result = process_weis_data(feed, cfg, reference_instant=reference_instant)

    if as_json:
        typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    else:
        _print_summary(result)


@app.command()
def serve(host: str = "0.0.0.0", port: int = 8000):
    """Serve GET /api/weis with uvicorn."""
    import uvicorn

    console.print(f"API docs available at: http://localhost:{port}/docs")
    uvicorn.run("greenwindow.api:app", host=host, port=port)


if __name__ == "__main__":
    sys.argv = _strip_ipykernel_args(sys.argv)
    app(standalone_mode=False)  # <-- prevents SystemExit in Jupyter
