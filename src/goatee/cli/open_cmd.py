"""goatee info / show — open a file the way the editor does."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table


def info_cmd(
    path: Annotated[Path, typer.Argument(help="File to inspect")],
):
    """Show detected encoding, language and access mode of a file."""
    from goatee.cli.app import is_json, report_error
    from goatee.errors import GoateeError
    from goatee.tab import Tab

    try:
        tab = Tab.open(path)
    except GoateeError as e:
        report_error(e)

    doc = tab.document
    info = {
        "path": doc.path,
        "encoding": doc.encoding,
        "language": doc.language,
        "read_only": doc.read_only,
        "characters": len(doc.text),
        "lines": doc.text.count("\n") + 1 if doc.text else 0,
    }
    if tab.status:
        info["status"] = tab.status

    if is_json():
        print(json.dumps(info, indent=2))
        return

    table = Table(title=doc.display_name, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key.replace("_", " ").title(), str(value))
    Console().print(table)


def show_cmd(
    path: Annotated[Path, typer.Argument(help="File to print")],
    encoding: Annotated[
        Optional[str],
        typer.Option("--encoding", "-e", help="Reinterpret the file in this charset (or 'binary')"),
    ] = None,
):
    """Print the canonical text of a file: decoded text, or a hex dump for binary data."""
    from goatee.cli.app import is_json, report_error
    from goatee.errors import GoateeError
    from goatee.tab import Tab

    try:
        tab = Tab.open(path)
        if encoding:
            tab.change_encoding(encoding)
    except GoateeError as e:
        report_error(e)

    doc = tab.document
    if is_json():
        print(json.dumps({"encoding": doc.encoding, "language": doc.language, "text": doc.text}))
    else:
        typer.echo(doc.text)
