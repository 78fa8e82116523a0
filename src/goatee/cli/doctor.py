"""goatee doctor — validate config and the detection/highlighting libraries."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table


def _check_config() -> tuple[bool, str]:
    """Verify config loads without error."""
    try:
        from goatee.config import config_files, get_settings
        settings = get_settings()
        files = ", ".join(str(p) for p in config_files()) or "defaults"
        return True, f"{files}; hex={settings.hex.bytes_in_line}/line, max matches={settings.search.max_items}"
    except Exception as e:
        return False, str(e)


def _check_libmagic() -> tuple[bool, str]:
    """Sniff a PNG header and a line of text through libmagic."""
    try:
        from goatee.content.detector import sniff_content_type
        png, png_charset = sniff_content_type(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
        text, text_charset = sniff_content_type(b"hello world\n")
        ok = png_charset == "binary" and text.startswith("text/")
        return ok, f"{png}; charset={png_charset} / {text}; charset={text_charset}"
    except Exception as e:
        return False, str(e)


def _check_chardet() -> tuple[bool, str]:
    try:
        import chardet
        result = chardet.detect("Съешь же ещё этих мягких французских булок".encode("koi8-r"))
        return True, f"chardet {chardet.__version__}: {result['encoding']} ({result['confidence']:.2f})"
    except Exception as e:
        return False, str(e)


def _check_languages() -> tuple[bool, str]:
    """Count Pygments language tags and check the ones the classifier relies on."""
    try:
        from goatee.config import get_settings
        from goatee.registry import PygmentsLanguages
        registry = PygmentsLanguages()
        settings = get_settings()
        wanted = {settings.hex.language, settings.language.fallback}
        missing = sorted(t for t in wanted if not registry.is_known(t))
        if missing:
            return False, f"unknown tags: {', '.join(missing)}"
        return True, f"{len(registry.tags)} language tags"
    except Exception as e:
        return False, str(e)


def _check_charsets() -> tuple[bool, str]:
    """Every charset offered to the user must resolve to a codec."""
    from goatee.registry import CharsetRegistry
    registry = CharsetRegistry()
    missing = [c for c in registry.names if not registry.supports(c)]
    if missing:
        return False, f"unsupported: {', '.join(missing)}"
    return True, f"{len(registry.names)} charsets"


def _run_checks() -> list[dict]:
    """Run all checks and return results."""
    checks = [
        ("Config", _check_config),
        ("libmagic", _check_libmagic),
        ("chardet", _check_chardet),
        ("Languages", _check_languages),
        ("Charsets", _check_charsets),
    ]
    results = []
    for name, check_fn in checks:
        ok, detail = check_fn()
        results.append({"check": name, "ok": ok, "detail": detail})
    return results


def doctor_cmd():
    """Check libraries and configuration."""
    from goatee.cli.app import is_json

    results = _run_checks()

    if is_json():
        print(json.dumps(results, indent=2))
        return

    console = Console()
    table = Table(title="goatee doctor", show_lines=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Detail")

    all_ok = True
    for r in results:
        status = "[green]PASS[/green]" if r["ok"] else "[red]FAIL[/red]"
        if not r["ok"]:
            all_ok = False
        table.add_row(r["check"], status, r["detail"])

    console.print(table)
    if all_ok:
        console.print("\n[bold green]All checks passed.[/bold green]")
    else:
        console.print("\n[bold yellow]Some checks failed. See details above.[/bold yellow]")
        raise typer.Exit(code=1)
