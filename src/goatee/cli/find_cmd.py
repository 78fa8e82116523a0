"""goatee find / replace — the editor's find bar over a file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

SNIPPET_LENGTH = 40


def _snippet(text: str, start: int, end: int) -> str:
    snippet = text[start:end].replace("\n", "\\n")
    if len(snippet) > SNIPPET_LENGTH:
        snippet = snippet[: SNIPPET_LENGTH - 1] + "…"
    return snippet


def find_cmd(
    path: Annotated[Path, typer.Argument(help="File to search")],
    pattern: Annotated[str, typer.Argument(help="Text, regex, or hex bytes for binary files")],
    regex: Annotated[bool, typer.Option("--regex", "-r", help="Treat PATTERN as a regex")] = False,
    case_sensitive: Annotated[
        bool, typer.Option("--case-sensitive", "-c", help="Match case exactly")
    ] = False,
    cursor: Annotated[
        Optional[int],
        typer.Option("--from", help="Character offset to search onwards (or backwards) from"),
    ] = None,
    backward: Annotated[
        bool, typer.Option("--backward", "-b", help="With --from, pick the match before the offset")
    ] = False,
):
    """List every match of PATTERN in a file and mark the current one."""
    from goatee.cli.app import is_json, report_error
    from goatee.errors import GoateeError
    from goatee.models import SearchOptions
    from goatee.tab import Tab

    options = SearchOptions(use_regex=regex, case_sensitive=case_sensitive)
    try:
        tab = Tab.open(path)
        matches = tab.find(pattern, options)
    except GoateeError as e:
        report_error(e)

    if cursor is not None:
        tab.find_next(forward=not backward, cursor=cursor)

    text = tab.document.text
    current = tab.search.current_index
    rows = []
    for i, m in enumerate(matches):
        line, column = tab.position(m.start)
        rows.append(
            {
                "index": i,
                "start": m.start,
                "end": m.end,
                "line": line,
                "column": column,
                "text": text[m.start : m.end],
                "current": i == current,
            }
        )

    if is_json():
        print(
            json.dumps(
                {
                    "pattern": pattern,
                    "hex_mode": tab.document.is_binary,
                    "wrapped": tab.search.wrapped,
                    "matches": rows,
                },
                indent=2,
            )
        )
        return

    console = Console()
    if not rows:
        console.print("[yellow]No matches.[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"{len(rows)} match(es) in {tab.document.display_name}")
    table.add_column("#", justify="right")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Offsets")
    table.add_column("Match")
    for row in rows:
        marker = "[bold yellow]>[/bold yellow] " if row["current"] else ""
        table.add_row(
            f"{marker}{row['index']}",
            str(row["line"]),
            str(row["column"]),
            f"{row['start']}-{row['end']}",
            escape(_snippet(text, row["start"], row["end"])),
        )
    console.print(table)
    if tab.search.wrapped:
        console.print("[dim]Search wrapped around.[/dim]")


def replace_cmd(
    path: Annotated[Path, typer.Argument(help="File to edit")],
    pattern: Annotated[str, typer.Argument(help="Text, regex, or hex bytes for binary files")],
    replacement: Annotated[str, typer.Argument(help="Replacement text (or hex bytes)")],
    replace_all: Annotated[bool, typer.Option("--all", "-a", help="Replace every occurrence")] = False,
    regex: Annotated[bool, typer.Option("--regex", "-r", help="Treat PATTERN as a regex")] = False,
    case_sensitive: Annotated[
        bool, typer.Option("--case-sensitive", "-c", help="Match case exactly")
    ] = False,
    write: Annotated[
        bool, typer.Option("--write", "-w", help="Save the result back to the file")
    ] = False,
):
    """Replace PATTERN in a file; prints the result unless --write is given."""
    from goatee.cli.app import is_json, report_error
    from goatee.errors import GoateeError
    from goatee.models import SearchOptions
    from goatee.tab import Tab

    options = SearchOptions(use_regex=regex, case_sensitive=case_sensitive)
    try:
        tab = Tab.open(path)
        outcome = tab.replace(pattern, replacement, options, replace_all=replace_all)
        if write:
            tab.save()
    except GoateeError as e:
        report_error(e)

    if is_json():
        print(
            json.dumps(
                {
                    "status": "ok",
                    "replaced": outcome.count,
                    "promoted_to_all": outcome.promoted_to_all,
                    "written": write,
                    "text": None if write else outcome.text,
                },
                indent=2,
            )
        )
        return

    err = Console(stderr=True)
    err.print(f"[green]{escape(tab.status)}[/green]")
    if write:
        err.print(f"Saved {escape(tab.document.path)}")
    else:
        typer.echo(outcome.text)
