"""Encoding detection: text vs. binary, and which charset.

libmagic gives a coarse MIME type with a charset parameter; chardet's
statistical detector is consulted when that parameter is missing or
cannot be trusted.
"""

from __future__ import annotations

import logging

from goatee.config import get_settings
from goatee.errors import DetectionFailed
from goatee.models import CHARSET_BINARY, CHARSET_UTF8

log = logging.getLogger(__name__)

# libmagic charset values that say nothing useful about the text
_UNUSABLE = {"", "unknown-8bit", "unknown"}
_UTF8_FAMILY = {"utf-8", "us-ascii"}


def sniff_content_type(data: bytes) -> tuple[str, str]:
    """Return ``(mime_type, charset)`` as reported by libmagic."""
    import magic

    sniffed = magic.from_buffer(data, mime=True)
    detector = magic.Magic(mime_encoding=True)
    charset = detector.from_buffer(data)
    return sniffed.strip().lower(), charset.strip().lower()


def detect_chardet(data: bytes, *, min_confidence: float | None = None) -> str:
    """Statistical charset detection; raises DetectionFailed below the threshold."""
    import chardet

    if min_confidence is None:
        min_confidence = get_settings().detect.min_confidence

    result = chardet.detect(data)
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    log.debug("chardet guessed %s with confidence %.2f", encoding, confidence)

    if not encoding or confidence < min_confidence:
        raise DetectionFailed(
            f"failed detect charset with chardet (confidence {confidence:.2f})"
        )
    return _normalize(encoding)


def _normalize(charset: str) -> str:
    charset = charset.lower()
    if charset in _UTF8_FAMILY or charset == "ascii":
        return CHARSET_UTF8
    return charset


def _is_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def detect(data: bytes) -> str:
    """Detect the encoding of *data*.

    Returns a charset name, ``utf-8`` for empty input, or ``binary`` when
    the sniffed content is not text. Raises DetectionFailed when the
    charset cannot be determined with enough confidence.
    """
    if not data:
        return CHARSET_UTF8

    cfg = get_settings().detect
    mime, charset = sniff_content_type(data[: cfg.sniff_bytes])
    log.debug("libmagic sniffed %s; charset=%s", mime, charset)

    if charset == CHARSET_BINARY:
        return CHARSET_BINARY

    if charset in _UNUSABLE:
        return detect_chardet(data, min_confidence=cfg.min_confidence)

    if charset in _UTF8_FAMILY and not _is_utf8(data):
        # the sniffed prefix looked like UTF-8, the whole buffer is not
        return detect_chardet(data, min_confidence=cfg.min_confidence)

    return _normalize(charset)
