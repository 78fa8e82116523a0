"""goatee CLI — Typer entrypoint with global options."""

from __future__ import annotations

import json
import logging
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from goatee.errors import GoateeError

app = typer.Typer(
    name="goatee",
    help="goatee — inspect, search and convert text and binary files.",
    no_args_is_help=True,
)

# Global state shared across subcommands
_state: dict = {"json": False}


def is_json() -> bool:
    """Check if --json output mode is active."""
    return _state["json"]


def report_error(err: GoateeError) -> NoReturn:
    """Show a failed action to the user and exit non-zero."""
    if is_json():
        print(json.dumps({"status": "error", "operation": err.operation, "error": str(err)}))
    else:
        Console(stderr=True).print(f"[red]Failed to {err.operation}:[/red] {escape(str(err))}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log detection and search details")
    ] = False,
):
    """Global options applied before any subcommand."""
    _state["json"] = json_output
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )


# Register subcommands -------------------------------------------------------

from goatee.cli.config_cmd import config_cmd  # noqa: E402
from goatee.cli.convert_cmd import convert_cmd, hexdump_cmd  # noqa: E402
from goatee.cli.doctor import doctor_cmd  # noqa: E402
from goatee.cli.find_cmd import find_cmd, replace_cmd  # noqa: E402
from goatee.cli.open_cmd import info_cmd, show_cmd  # noqa: E402

app.command(name="info", help="Show detected encoding and language of a file.")(info_cmd)
app.command(name="show", help="Print a file as the editor buffer would hold it.")(show_cmd)
app.command(name="find", help="Search a file, plain, regex or hex.")(find_cmd)
app.command(name="replace", help="Replace occurrences in a file.")(replace_cmd)
app.command(name="convert", help="Save a file in another charset.")(convert_cmd)
app.command(name="hexdump", help="Print a file as hex-dump text.")(hexdump_cmd)
app.command(name="config", help="Show effective preferences.")(config_cmd)
app.command(name="doctor", help="Check libraries and configuration.")(doctor_cmd)
