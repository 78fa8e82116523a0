"""goatee convert / hexdump."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape


def convert_cmd(
    path: Annotated[Path, typer.Argument(help="Text file to convert")],
    charset: Annotated[str, typer.Argument(help="Target charset, e.g. windows-1251")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write here instead of in place")
    ] = None,
):
    """Re-save a text file in another charset."""
    from goatee.cli.app import is_json, report_error
    from goatee.errors import GoateeError
    from goatee.tab import Tab

    try:
        tab = Tab.open(path)
        source = tab.document.encoding
        tab.convert_to(charset)
        saved = tab.save_as(output) if output else tab.save()
    except GoateeError as e:
        report_error(e)

    if is_json():
        print(json.dumps({"status": "ok", "from": source, "to": charset, "path": str(saved)}))
    else:
        Console().print(f"[green]{escape(source)} → {escape(charset)}[/green] {escape(str(saved))}")


def hexdump_cmd(
    path: Annotated[Path, typer.Argument(help="File to dump")],
    width: Annotated[
        Optional[int], typer.Option("--width", "-w", min=1, help="Bytes per line")
    ] = None,
):
    """Print any file as hex-dump text, whatever its encoding."""
    from goatee.cli.app import report_error
    from goatee.config import get_settings
    from goatee.content import hexcodec
    from goatee.errors import FileAccessError

    try:
        data = path.read_bytes()
    except OSError as e:
        report_error(FileAccessError(f"failed read file `{path}`", str(path), cause=e))

    typer.echo(hexcodec.encode(data, width or get_settings().hex.bytes_in_line))
