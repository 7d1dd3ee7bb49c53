"""Scan CLI command: filesystem inventory only."""

from pathlib import Path
from typing import Optional

import typer

from ..config import load_config
from ..exceptions import WorkpulseError
from ..formatters import RichSummary
from ..logging_config import setup_logging
from ..scanning import scan as scan_tree
from . import app
from ._common import console, exit_code_for, flag, print_error


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(None, help="Directory to inventory [default: current directory]"),
    include_vcs: bool = typer.Option(False, "--include-vcs", help="Inventory VCS metadata folders"),
    include_compressed: bool = typer.Option(
        False, "--include-compressed", help="Inventory compressed archives"
    ),
    include_archive_temp: bool = typer.Option(
        False, "--include-archive-temp", help="Inventory archive/temp paths"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Count files, folders, lines and characters under a directory.

    Symlinks and reparse points are counted but never followed. No git
    history is read and no report files are written.

    [bold cyan]Examples:[/bold cyan]

      workpulse scan

      workpulse scan ~/src/app --include-vcs
    """
    logger = setup_logging(verbose=verbose)

    try:
        cfg = load_config(
            config_file=config,
            target=path,
            include_vcs=flag(include_vcs),
            include_compressed=flag(include_compressed),
            include_archive_temp=flag(include_archive_temp),
            verbose=verbose,
        )
        with console.status(f"Scanning {cfg.target_path}..."):
            snapshot = scan_tree(cfg.target_path, cfg.filter_policy)
        RichSummary(out=console).print_snapshot(snapshot)

    except WorkpulseError as e:
        logger.debug(f"{e.__class__.__name__}: {e}", exc_info=True)
        print_error(e)
        raise typer.Exit(exit_code_for(e))

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted[/yellow]")
        raise typer.Exit(130)
