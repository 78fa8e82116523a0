"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x10\x00\x00\x00\x10\x08\x06\x00\x00\x00"


class StaticLanguages:
    """A fixed language registry, so classifier tests don't depend on Pygments' alias list."""

    def __init__(self, tags, guesses: dict[str, str] | None = None):
        self.tags = frozenset(tags)
        self.guesses = guesses or {}

    def is_known(self, tag: str) -> bool:
        return tag in self.tags

    def guess_by_filename(self, filename: str) -> str:
        return self.guesses.get(filename, "")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Point XDG_CONFIG_HOME at a temp dir and run from it, so no user config leaks in."""
    for key in list(os.environ):
        if key.startswith("GOATEE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)

    # Reset settings cache between tests
    from goatee.config import reset_settings
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def languages():
    return StaticLanguages(
        {"py", "python", "python3", "sh", "bash", "xml", "yaml", "toml", "ini", "go", "hexdump"},
        guesses={"Makefile": "make"},
    )


@pytest.fixture
def make_tab(languages):
    """Build a Tab wired to the static language registry."""
    from goatee.content.classifier import LanguageClassifier
    from goatee.tab import Tab

    def _make(path=None, **kwargs):
        classifier = LanguageClassifier(registry=languages)
        if path is None:
            return Tab.new(classifier=classifier, **kwargs)
        return Tab.open(path, classifier=classifier, **kwargs)

    return _make


@pytest.fixture
def png_bytes():
    return PNG_HEADER + bytes(range(256))
