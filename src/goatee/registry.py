"""Read-only charset and language registries, injected into the content engine."""

from __future__ import annotations

import codecs
import logging
from functools import cached_property
from typing import Protocol, runtime_checkable

from goatee.errors import UnsupportedCharsetError
from goatee.models import CHARSET_BINARY, CHARSET_UTF8

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Charsets
# ---------------------------------------------------------------------------

CHARSETS: tuple[str, ...] = (
    "UTF-8",
    "UTF-16",
    "ISO-8859-1",
    "ISO-8859-2",
    "ISO-8859-7",
    "ISO-8859-9",
    "ISO-8859-15",
    "Shift_JIS",
    "EUC-KR",
    "GB18030",
    "Big5",
    "TIS-620",
    "KOI8-R",
    "windows-1250",
    "windows-1251",
    "windows-1252",
    "windows-1253",
    "windows-1254",
    "windows-1255",
    "windows-1256",
    "windows-1257",
    "windows-1258",
    CHARSET_BINARY,
)


class CharsetRegistry:
    """The encodings offered to the user, resolved through Python's codec registry."""

    def __init__(self, names: tuple[str, ...] = CHARSETS):
        self._names = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def codec_name(
        self, charset: str, *, to_charset: str = CHARSET_UTF8, from_charset: str | None = None
    ) -> str:
        """Resolve *charset* to a Python text codec name.

        Raises UnsupportedCharsetError for unknown names and for codecs
        that are not text encodings (``hex``, ``rot13``, ...). The error
        names the conversion as ``to_charset`` from ``from_charset``
        (default: *charset* to UTF-8).
        """
        try:
            info = codecs.lookup(charset)
            "".encode(info.name)
        except LookupError as e:
            raise UnsupportedCharsetError(to_charset, from_charset or charset, cause=e) from e
        return info.name

    def supports(self, charset: str) -> bool:
        if charset == CHARSET_BINARY:
            return True
        try:
            self.codec_name(charset)
        except UnsupportedCharsetError:
            return False
        return True

    def is_canonical(self, charset: str) -> bool:
        """True for charsets whose bytes are already canonical UTF-8 text."""
        try:
            name = codecs.lookup(charset).name
        except LookupError:
            return False
        return name in ("utf-8", "ascii")


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

@runtime_checkable
class LanguageRegistry(Protocol):
    """Syntax-highlighting registry the classifier consults."""

    def is_known(self, tag: str) -> bool: ...

    def guess_by_filename(self, filename: str) -> str: ...


class PygmentsLanguages:
    """Language tags are Pygments lexer aliases."""

    @cached_property
    def tags(self) -> frozenset[str]:
        from pygments.lexers import get_all_lexers

        tags = set()
        for _name, aliases, _filenames, _mimetypes in get_all_lexers():
            tags.update(a.lower() for a in aliases)
        log.debug("Loaded %d language tags from pygments", len(tags))
        return frozenset(tags)

    def is_known(self, tag: str) -> bool:
        return bool(tag) and tag in self.tags

    def guess_by_filename(self, filename: str) -> str:
        from pygments.lexers import get_lexer_for_filename
        from pygments.util import ClassNotFound

        if not filename:
            return ""
        try:
            lexer = get_lexer_for_filename(filename)
        except ClassNotFound:
            return ""
        return lexer.aliases[0] if lexer.aliases else lexer.name.lower()
