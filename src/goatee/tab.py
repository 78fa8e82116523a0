"""One editor tab: a Document, its search state, and the file it came from.

Every public method is one user action. It either completes or raises a
GoateeError, leaving the document as it was.
"""

from __future__ import annotations

import itertools
import logging
from pathlib import Path

from goatee.config import Settings, get_settings
from goatee.content import hexcodec
from goatee.content.classifier import LanguageClassifier
from goatee.content.converter import CharsetConverter
from goatee.content.detector import detect
from goatee.errors import ConversionError, DetectionFailed, FileAccessError, UnsupportedCharsetError
from goatee.models import CHARSET_BINARY, CHARSET_UTF8, Document, Match, ReplaceOutcome, SearchOptions
from goatee.search.engine import SearchState
from goatee.search.replace import replace as replace_text

log = logging.getLogger(__name__)

_new_tabs = itertools.count()


class Tab:
    """Owns exactly one Document; nothing else references it."""

    def __init__(
        self,
        document: Document | None = None,
        *,
        converter: CharsetConverter | None = None,
        classifier: LanguageClassifier | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.converter = converter or CharsetConverter()
        self.classifier = classifier or LanguageClassifier(config=self.settings.language)
        self.document = document or Document(name=f"new{next(_new_tabs)}")
        self.search = SearchState()
        self.status = ""

    @classmethod
    def new(cls, **kwargs) -> Tab:
        """An empty, unsaved UTF-8 buffer."""
        return cls(**kwargs)

    @classmethod
    def open(cls, path: str | Path, **kwargs) -> Tab:
        """Open *path* in a new tab; raises FileAccessError if it can't be read."""
        tab = cls(Document(path=str(path)), **kwargs)
        tab.revert()
        return tab

    # -- Reading -------------------------------------------------------------

    @staticmethod
    def _read(path: str) -> tuple[bytes, bool]:
        """Read the whole file; the bool is True when it is not writable."""
        try:
            with open(path, "r+b") as f:
                return f.read(), False
        except PermissionError:
            log.info("No write access to %s, opening read-only", path)
        except OSError as e:
            raise FileAccessError(f"failed open file `{path}`", path, cause=e) from e

        try:
            with open(path, "rb") as f:
                return f.read(), True
        except OSError as e:
            raise FileAccessError(f"failed read file `{path}`", path, cause=e) from e

    @property
    def hex_language(self) -> str:
        tag = self.settings.hex.language
        return tag if self.classifier.registry.is_known(tag) else ""

    def _load(self, data: bytes, filename: str) -> Document:
        """Build a Document from raw bytes: detect, convert, classify."""
        self.status = ""
        try:
            encoding = detect(data)
        except DetectionFailed as e:
            log.warning("%s: %s, opening as binary", filename, e)
            self.status = str(e)
            encoding = CHARSET_BINARY

        text = ""
        if encoding != CHARSET_BINARY:
            try:
                encoding = self.converter.resolve(data, encoding)
                text = self.converter.to_canonical(data, encoding)
            except (ConversionError, UnsupportedCharsetError) as e:
                log.warning("%s: %s, opening as binary", filename, e)
                self.status = str(e)
                encoding = CHARSET_BINARY

        if encoding == CHARSET_BINARY:
            text = hexcodec.encode(data, self.settings.hex.bytes_in_line)
            language = self.hex_language
        else:
            language = self.classifier.classify(filename, text.encode(CHARSET_UTF8))

        return Document(
            path=self.document.path,
            name=self.document.name,
            encoding=encoding,
            language=language,
            read_only=self.document.read_only,
            text=text,
        )

    def revert(self) -> Document:
        """Replace the buffer with the file's current content."""
        path = self.document.path
        if not path:
            raise FileAccessError("buffer has no file to revert to")

        data, read_only = self._read(path)
        document = self._load(data, path)
        document.read_only = read_only
        self.document = document
        self._refresh_search()
        log.info("Opened %s (%s, %s)", path, document.encoding, document.language or "plain")
        return document

    # -- Writing -------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """The document's logical bytes, derived from the canonical text."""
        doc = self.document
        if doc.is_binary:
            return hexcodec.decode(doc.text)
        if self.converter.registry.is_canonical(doc.encoding):
            return self.converter.from_canonical(doc.text, CHARSET_UTF8)
        return self.converter.from_canonical(doc.text, doc.encoding)

    def save(self) -> Path:
        doc = self.document
        if not doc.path:
            raise FileAccessError(f"buffer {doc.display_name} has no file name")
        if doc.read_only:
            raise FileAccessError(f"file {doc.path} is read only", doc.path)

        data = self.to_bytes()
        path = Path(doc.path)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise FileAccessError(f"failed save file `{doc.path}`", doc.path, cause=e) from e

        log.info("Saved %s (%d bytes, %s)", path, len(data), doc.encoding)
        return path

    def save_as(self, path: str | Path) -> Path:
        """Point the document at *path* and save; restores the old target on failure."""
        doc = self.document
        old_path, old_read_only = doc.path, doc.read_only
        doc.path, doc.read_only = str(path), False
        try:
            return self.save()
        except Exception:
            doc.path, doc.read_only = old_path, old_read_only
            raise

    # -- Re-interpretation ---------------------------------------------------

    def change_encoding(self, charset: str) -> Document:
        """Reinterpret the document's bytes as *charset* (or as binary)."""
        doc = self.document
        if charset == doc.encoding:
            return doc

        data = self.to_bytes()
        if charset == CHARSET_BINARY:
            text = hexcodec.encode(data, self.settings.hex.bytes_in_line)
            language = self.hex_language
        else:
            charset = self.converter.resolve(data, charset)
            text = self.converter.to_canonical(data, charset)
            language = doc.language
            if doc.is_binary:
                language = self.classifier.classify(doc.path, text.encode(CHARSET_UTF8))

        log.info("Changed encoding of %s: %s -> %s", doc.display_name, doc.encoding, charset)
        doc.encoding, doc.language, doc.text = charset, language, text
        self._refresh_search()
        return doc

    def convert_to(self, charset: str) -> Document:
        """Keep the text, write it as *charset* from the next save on."""
        doc = self.document
        if doc.is_binary or charset == CHARSET_BINARY:
            raise UnsupportedCharsetError(charset, doc.encoding)
        self.converter.from_canonical(doc.text, charset)
        log.info("Converting %s: %s -> %s", doc.display_name, doc.encoding, charset)
        doc.encoding = charset
        return doc

    def change_language(self, tag: str) -> None:
        if not self.classifier.registry.is_known(tag):
            raise ValueError(f"unknown language `{tag}`")
        self.document.language = tag

    # -- Editing and search ----------------------------------------------------

    def set_text(self, text: str) -> None:
        """The editing widget changed the content."""
        self.document.text = text
        self._refresh_search()

    def _refresh_search(self) -> None:
        if self.search.pattern:
            self.search.refresh(self.document.text, max_matches=self.settings.search.max_items)
        else:
            self.search.invalidate()

    def find(self, pattern: str, options: SearchOptions | None = None) -> list[Match]:
        return self.search.update(
            self.document.text,
            pattern,
            options or SearchOptions(),
            hex_mode=self.document.is_binary,
            max_matches=self.settings.search.max_items,
        )

    def find_next(
        self, forward: bool = True, cursor: int | None = None
    ) -> tuple[Match | None, Match | None]:
        return self.search.find_next(forward, cursor)

    def replace(
        self,
        pattern: str,
        replacement: str,
        options: SearchOptions | None = None,
        *,
        replace_all: bool = False,
    ) -> ReplaceOutcome:
        options = options or SearchOptions()
        outcome = replace_text(
            self.document.text,
            pattern,
            replacement,
            options,
            replace_all=replace_all,
            hex_mode=self.document.is_binary,
            group_size=self.settings.hex.bytes_in_line,
        )
        if outcome.promoted_to_all:
            self.status = "regexp always replaces all occurrences"
        else:
            self.status = f"{outcome.count} occurrence(s) replaced"

        self.document.text = outcome.text
        self.find(pattern, options)
        return outcome

    def position(self, offset: int) -> tuple[int, int]:
        """1-based ``(line, column)`` of a character offset."""
        text = self.document.text
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return line, column
