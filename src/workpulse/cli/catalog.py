"""Catalog CLI command: show the effective productivity-factor catalog."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..config import load_config
from ..estimation import estimate_alternative, load_catalog
from ..formatters.base import format_number
from ..exceptions import WorkpulseError
from ..logging_config import setup_logging
from . import app
from ._common import console, exit_code_for, print_error


@app.command()
def catalog(
    catalog_file: Optional[Path] = typer.Option(
        None, "--catalog", help="JSON catalog to validate and show instead of the built-in one"
    ),
    basis: Optional[float] = typer.Option(
        None, "--basis", min=0, help="Evaluate every entry for this many basis lines"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Print the alternative-effort catalog.

    Invalid entries of a custom catalog are reported as warnings and left
    out, exactly as a report run would.

    [bold cyan]Examples:[/bold cyan]

      workpulse catalog

      workpulse catalog --catalog team-factors.json --basis 1200
    """
    logger = setup_logging(verbose=verbose)

    try:
        cfg = load_config(config_file=config, catalog_path=catalog_file, verbose=verbose)
        entries = load_catalog(cfg.catalog_path)
    except WorkpulseError as e:
        logger.debug(f"{e.__class__.__name__}: {e}", exc_info=True)
        print_error(e)
        raise typer.Exit(exit_code_for(e))

    source = cfg.catalog_path or "built-in"
    table = Table(title=f"Effort catalog ({escape(str(source))})", show_header=True, header_style="bold")
    table.add_column("Key", style="dim")
    table.add_column("Methodology")
    table.add_column("Hours/line", justify="right")
    if basis is not None:
        table.add_column(f"Hours @ {format_number(basis)}", justify="right")
    table.add_column("References")

    rows = estimate_alternative(basis, entries) if basis is not None else None
    for i, entry in enumerate(entries):
        cells = [escape(entry.key), escape(entry.label), f"{entry.factor:g}"]
        if rows is not None:
            cells.append(f"{rows[i].estimated_hours:.1f}")
        cells.append(escape("\n".join(entry.reference_links)))
        table.add_row(*cells)

    console.print(table)
