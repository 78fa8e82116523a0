"""Regex/plain search over canonical text, with a hex-dump mode.

Plain searches go through the regex engine too: the pattern is escaped
first. In hex mode every pair of hex digits in the pattern also accepts
the spaces and newlines the hex dump puts between bytes, so ``deadbeef``
finds ``de ad\\nbe ef`` wherever the dump wraps.
"""

from __future__ import annotations

import bisect
import itertools
import logging
import re

from pydantic import BaseModel

from goatee.errors import InvalidPatternError
from goatee.models import Match, SearchOptions

log = logging.getLogger(__name__)

DEFAULT_MAX_MATCHES = 1024

_PATTERN_WHITESPACE = re.compile(r"[ \n\r]+")
_HEX_PAIR = re.compile(r"([0-9a-fA-F]{2})")
_DUMP_SEPARATOR = "[ \r\n]*"


def build_expression(pattern: str, options: SearchOptions, *, hex_mode: bool = False) -> str:
    """Turn the user's pattern into the regex source that is actually compiled."""
    expr = pattern
    if hex_mode:
        expr = _PATTERN_WHITESPACE.sub("", expr)
    if not options.use_regex:
        expr = re.escape(expr)
    if hex_mode:
        expr = _HEX_PAIR.sub(lambda m: m.group(1) + _DUMP_SEPARATOR, expr)
    return expr


def compile_pattern(
    pattern: str,
    options: SearchOptions,
    *,
    hex_mode: bool = False,
    flags: int = re.MULTILINE | re.DOTALL,
) -> re.Pattern[str]:
    """Compile a user pattern; raises InvalidPatternError on bad syntax."""
    if not options.case_sensitive or hex_mode:
        flags |= re.IGNORECASE
    expr = build_expression(pattern, options, hex_mode=hex_mode)
    try:
        return re.compile(expr, flags)
    except re.error as e:
        raise InvalidPatternError(f"invalid search query `{pattern}`", cause=e) from e


def search(
    text: str,
    pattern: str,
    options: SearchOptions,
    *,
    hex_mode: bool = False,
    max_matches: int = DEFAULT_MAX_MATCHES,
) -> list[Match]:
    """Return up to *max_matches* non-empty matches, left to right.

    Offsets are character offsets into *text*. Zero-width matches are
    dropped since there is nothing to highlight.
    """
    if not pattern or (hex_mode and not _PATTERN_WHITESPACE.sub("", pattern)):
        return []

    regex = compile_pattern(pattern, options, hex_mode=hex_mode)
    found = (m for m in regex.finditer(text) if m.end() > m.start())

    matches: list[Match] = []
    for m in itertools.islice(found, max_matches):
        start, end = m.span()
        if hex_mode:
            # the separator after the last pair is not part of the bytes
            while end > start and text[end - 1] in " \r\n":
                end -= 1
        matches.append(Match(start=start, end=end))
    return matches


class SearchState(BaseModel):
    """The last search over one document and the active match."""

    pattern: str = ""
    options: SearchOptions = SearchOptions()
    hex_mode: bool = False
    matches: list[Match] = []
    current_index: int | None = None
    wrapped: bool = False

    @property
    def current(self) -> Match | None:
        if self.current_index is None:
            return None
        return self.matches[self.current_index]

    def invalidate(self) -> None:
        """Forget matches; the text they pointed into has changed."""
        self.matches = []
        self.current_index = None
        self.wrapped = False

    def update(
        self,
        text: str,
        pattern: str,
        options: SearchOptions,
        *,
        hex_mode: bool = False,
        max_matches: int = DEFAULT_MAX_MATCHES,
    ) -> list[Match]:
        """Run a search and make the first match current.

        On InvalidPatternError the previous pattern and matches are kept.
        """
        matches = search(text, pattern, options, hex_mode=hex_mode, max_matches=max_matches)
        self.pattern = pattern
        self.options = options
        self.hex_mode = hex_mode
        self.invalidate()
        self.matches = matches
        if matches:
            self.current_index = 0
        log.debug("Search %r found %d matches", pattern, len(matches))
        return matches

    def refresh(self, text: str, *, max_matches: int = DEFAULT_MAX_MATCHES) -> list[Match]:
        """Re-run the current pattern against changed text."""
        return self.update(
            text, self.pattern, self.options, hex_mode=self.hex_mode, max_matches=max_matches
        )

    def find_next(
        self, forward: bool = True, cursor: int | None = None
    ) -> tuple[Match | None, Match | None]:
        """Move the current match and return ``(previous, current)``.

        Navigation is cyclic; crossing either end sets ``wrapped``. With a
        *cursor* offset the nearest match at/after it (forward) or before
        it (backward) becomes current.
        """
        previous = self.current
        self.wrapped = False
        count = len(self.matches)
        if not count:
            return previous, None

        if cursor is not None:
            starts = [m.start for m in self.matches]
            if forward:
                index = bisect.bisect_left(starts, cursor)
                if index >= count:
                    index, self.wrapped = 0, True
            else:
                index = bisect.bisect_left(starts, cursor) - 1
                if index < 0:
                    index, self.wrapped = count - 1, True
        elif self.current_index is None:
            index = 0 if forward else count - 1
        else:
            index = self.current_index + (1 if forward else -1)
            if index >= count:
                index, self.wrapped = 0, True
            elif index < 0:
                index, self.wrapped = count - 1, True

        self.current_index = index
        return previous, self.matches[index]
