"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="workpulse",
    help="workpulse - workspace activity analyzer and report generator",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"workpulse {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Report version-control and filesystem activity with effort estimates."""


# Import subcommands to register them
from .report import report as _report  # noqa: F401, E402
from .scan import scan as _scan  # noqa: F401, E402
from .catalog import catalog as _catalog  # noqa: F401, E402
