"""Report CLI command: build the report and write every requested format."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from ..api import run
from ..config import load_config
from ..exceptions import WorkpulseError
from ..formatters import RichSummary
from ..logging_config import setup_logging
from ..periods import PERIODS
from . import app
from ._common import ExitCode, console, exit_code_for, flag, print_error, split_formats
from .progress import ReportProgress


@app.command()
def report(
    period: Optional[str] = typer.Option(
        None,
        "--period",
        "-p",
        help="Reporting window: day | week | month | all | custom [default: week]",
        click_type=click.Choice(list(PERIODS), case_sensitive=False),
    ),
    start: Optional[str] = typer.Option(None, "--start", help="Custom range start (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--end", help="Custom range end (YYYY-MM-DD)"),
    formats: Optional[List[str]] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format(s): markdown, json, csv, html. Repeatable or comma separated",
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-d", help="Directory for timestamped report files"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Explicit report path; the extension is set per format"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", "-C", help="Directory to analyze [default: current directory]"
    ),
    ref: Optional[str] = typer.Option(None, "--ref", help="Git ref to walk [default: HEAD]"),
    all_branches: bool = typer.Option(
        False, "--all-branches", help="Include commits from every branch (ignores --ref)"
    ),
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", help="JSON catalog of productivity factors"
    ),
    baseline: Optional[Path] = typer.Option(
        None, "--baseline", help="Prior JSON report to compare against"
    ),
    max_commits: Optional[int] = typer.Option(
        None, "--max-commits", min=0, help="Commits listed in detail [default: 20]"
    ),
    include_vcs: bool = typer.Option(
        False, "--include-vcs", help="Inventory VCS metadata folders (.git, .hg, ...)"
    ),
    include_compressed: bool = typer.Option(
        False, "--include-compressed", help="Inventory compressed archives (.zip, .7z, ...)"
    ),
    include_archive_temp: bool = typer.Option(
        False, "--include-archive-temp", help="Inventory archive/temp paths (archive*, *.tmp, ...)"
    ),
    fallback_root: Optional[Path] = typer.Option(
        None, "--fallback-root", help="Repository to use when --path is not inside one"
    ),
    require_repo: bool = typer.Option(
        False, "--require-repo", help="Fail (exit 3) instead of reporting filesystem-only"
    ),
    git_timeout: Optional[int] = typer.Option(
        None, "--git-timeout", min=1, help="Seconds before git is considered unavailable"
    ),
    no_parallel: bool = typer.Option(
        False, "--no-parallel", help="Scan and read history sequentially"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        file_okay=True,
        dir_okay=False,
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Append logs to a file", hidden=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
):
    """
    Generate an activity report for a working copy.

    Reads git history for the selected window, inventories the tree and
    writes one file per format. JSON reports can be passed back later with
    --baseline to annotate changes.

    [bold cyan]Examples:[/bold cyan]

      workpulse report

      workpulse report -p month -f html,json -d reports/

      workpulse report -p custom --start 2024-01-01 --end 2024-01-31 -f md

      workpulse report -C ~/src/app --baseline reports/last.json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    try:
        cfg = load_config(
            config_file=config,
            target=path,
            fallback_root=fallback_root,
            require_repo=flag(require_repo),
            period=period,
            start=start,
            end=end,
            ref=ref,
            all_branches=flag(all_branches),
            git_timeout_seconds=git_timeout,
            include_vcs=flag(include_vcs),
            include_compressed=flag(include_compressed),
            include_archive_temp=flag(include_archive_temp),
            catalog_path=catalog,
            baseline_path=baseline,
            formats=split_formats(formats),
            output_dir=output_dir,
            output_path=output,
            max_commits_listed=max_commits,
            parallel=False if no_parallel else None,
            verbose=verbose,
            quiet=quiet,
        )

        if cfg.verbosity == "normal":
            with ReportProgress() as progress:
                rpt, result = run(cfg, on_progress=progress)
        else:
            rpt, result = run(cfg)

        if cfg.verbosity != "quiet":
            RichSummary(out=console, show_catalog=cfg.verbosity == "verbose").render(rpt)
            console.print()
            for fmt, written in result.written.items():
                console.print(f"{fmt:>8}: [bold green]{escape(str(written))}[/bold green]")

        if not result.ok:
            for error in result.failures.values():
                print_error(error)
            raise typer.Exit(ExitCode.WRITE_ERROR)

    except typer.Exit:
        raise

    except WorkpulseError as e:
        logger.debug(f"{e.__class__.__name__}: {e}", exc_info=True)
        print_error(e)
        raise typer.Exit(exit_code_for(e))

    except KeyboardInterrupt:
        logger.info("Report interrupted by user")
        console.print("\n[yellow]Report interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.debug("Unexpected error during report", exc_info=True)
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(ExitCode.INTERNAL_ERROR)
