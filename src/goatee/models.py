"""Shared domain models used across the system."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

CHARSET_BINARY = "binary"
CHARSET_UTF8 = "utf-8"


class Document(BaseModel):
    """The unit being edited: canonical text plus how it maps to bytes on disk."""

    path: str = ""
    name: str = ""
    encoding: str = CHARSET_UTF8
    language: str = ""
    read_only: bool = False
    text: str = ""

    @property
    def is_binary(self) -> bool:
        return self.encoding == CHARSET_BINARY

    @property
    def display_name(self) -> str:
        """Tab label: basename of the path, or the placeholder name."""
        if self.path:
            return Path(self.path).name
        return self.name


class SearchOptions(BaseModel):
    """User search toggles, passed in explicitly rather than read from widgets."""

    use_regex: bool = False
    case_sensitive: bool = False


class Match(BaseModel):
    """A match as character offsets into the canonical text."""

    start: int
    end: int

    def as_tuple(self) -> tuple[int, int]:
        return self.start, self.end


class ReplaceOutcome(BaseModel):
    text: str
    count: int = 0
    promoted_to_all: bool = False
