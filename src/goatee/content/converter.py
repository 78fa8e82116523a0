"""Charset conversion between on-disk bytes and canonical text."""

from __future__ import annotations

import codecs
import logging

from goatee.errors import ConversionError, UnsupportedCharsetError
from goatee.models import CHARSET_BINARY, CHARSET_UTF8
from goatee.registry import CharsetRegistry

log = logging.getLogger(__name__)

# codec names that leave the byte order to a BOM
_UTF16 = "utf-16"
_UTF16_BOMS = (
    (codecs.BOM_UTF16_BE, "utf-16-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
)


class CharsetConverter:
    """Strict, all-or-nothing transcoding through Python codecs.

    ``binary`` is not a charset; binary documents go through the hex codec.
    A byte-order mark is part of the text, so decoding then encoding with
    the name :meth:`resolve` returns gives back the original bytes.
    """

    def __init__(self, registry: CharsetRegistry | None = None):
        self.registry = registry or CharsetRegistry()

    def _codec(self, to_charset: str, from_charset: str, charset: str) -> str:
        if charset == CHARSET_BINARY:
            raise UnsupportedCharsetError(to_charset, from_charset)
        return self.registry.codec_name(charset, to_charset=to_charset, from_charset=from_charset)

    def resolve(self, data: bytes, charset: str) -> str:
        """Pin generic UTF-16 to the byte order *data* is in.

        A BOM decides; without one the data is taken as little-endian.
        Every other charset comes back unchanged.
        """
        if charset == CHARSET_BINARY:
            return charset
        if self._codec(CHARSET_UTF8, charset, charset) != _UTF16:
            return charset
        for bom, name in _UTF16_BOMS:
            if data.startswith(bom):
                return name
        return "utf-16-le"

    def to_canonical(self, data: bytes, charset: str) -> str:
        """Decode *data* from *charset* into canonical text."""
        codec = self._codec(CHARSET_UTF8, charset, self.resolve(data, charset))
        try:
            return data.decode(codec)
        except UnicodeDecodeError as e:
            raise ConversionError(f"failed convert encoding from `{charset}`", cause=e) from e

    def from_canonical(self, text: str, charset: str) -> bytes:
        """Encode canonical *text* back into *charset* bytes."""
        codec = self._codec(charset, CHARSET_UTF8, charset)
        if codec == _UTF16:
            # no recorded byte order: BOM plus little-endian
            codec = "utf-16-le"
            if not text.startswith("\ufeff"):
                text = "\ufeff" + text
        try:
            return text.encode(codec)
        except UnicodeEncodeError as e:
            raise ConversionError(f"failed restore encoding `{charset}`", cause=e) from e
