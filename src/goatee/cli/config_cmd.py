"""goatee config — effective preferences and where they come from."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table


def config_cmd():
    """Show every preference with its current value and allowed range."""
    from goatee.cli.app import is_json
    from goatee.config import PREFERENCES, config_files, get_settings

    settings = get_settings()
    files = [str(p) for p in config_files()]

    if is_json():
        print(json.dumps({"files": files, "settings": settings.model_dump()}, indent=2))
        return

    table = Table(title="goatee preferences")
    table.add_column("Section", style="bold")
    table.add_column("Preference")
    table.add_column("Value")
    table.add_column("Range")
    for pref in PREFERENCES:
        bounds = ""
        if pref.minimum is not None or pref.maximum is not None:
            low = "" if pref.minimum is None else f"{pref.minimum:g}"
            high = "" if pref.maximum is None else f"{pref.maximum:g}"
            bounds = f"{low}..{high}"
        value = pref.value(settings)
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(pref.section, pref.label, str(value), bounds)

    console = Console()
    console.print(table)
    console.print(f"Config files: {', '.join(files) or '(defaults only)'}")
