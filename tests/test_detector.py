"""Tests for goatee.content.detector."""

from __future__ import annotations

import codecs
from unittest.mock import patch

import pytest

from goatee.content import detector
from goatee.content.detector import detect, detect_chardet
from goatee.errors import DetectionFailed

FRENCH = (
    "Le coeur a ses raisons que la raison ne connaît point. "
    "Café, thé, crème brûlée et déjà vu : voilà l'été à la française.\n"
) * 4


def test_empty_is_utf8():
    assert detect(b"") == "utf-8"


def test_png_is_binary(png_bytes):
    assert detect(png_bytes) == "binary"


def test_ascii_text_is_utf8():
    assert detect(b"hello world\nsecond line\n") == "utf-8"


def test_utf8_text():
    assert detect("héllo wörld, 日本語のテキスト\n".encode("utf-8")) == "utf-8"


def test_latin1_text_is_a_latin_charset():
    encoding = detect(FRENCH.encode("iso-8859-1"))
    assert codecs.lookup(encoding).name in {"iso8859-1", "cp1252", "iso8859-15", "iso8859-9"}


def test_binary_sniff_skips_chardet():
    with patch.object(detector, "sniff_content_type", return_value=("application/octet-stream", "binary")), \
            patch("chardet.detect") as chardet_detect:
        assert detect(b"\x00\x01\x02") == "binary"
    chardet_detect.assert_not_called()


def test_explicit_charset_is_trusted():
    with patch.object(detector, "sniff_content_type", return_value=("text/plain", "iso-8859-2")):
        assert detect(b"abc\xb1") == "iso-8859-2"


def test_false_utf8_claim_falls_back_to_chardet():
    data = b"ascii prefix " * 10 + b"\xe9t\xe9"
    with patch.object(detector, "sniff_content_type", return_value=("text/plain", "us-ascii")), \
            patch("chardet.detect", return_value={"encoding": "ISO-8859-1", "confidence": 0.73}) as chardet_detect:
        assert detect(data) == "iso-8859-1"
    chardet_detect.assert_called_once_with(data)


def test_unknown_8bit_uses_chardet():
    with patch.object(detector, "sniff_content_type", return_value=("text/plain", "unknown-8bit")), \
            patch("chardet.detect", return_value={"encoding": "KOI8-R", "confidence": 0.9}):
        assert detect(b"\xf0\xd2\xc9\xd7\xc5\xd4") == "koi8-r"


def test_low_confidence_fails():
    with patch("chardet.detect", return_value={"encoding": "Big5", "confidence": 0.12}):
        with pytest.raises(DetectionFailed, match="0.12"):
            detect_chardet(b"\xa4\xa4", min_confidence=0.30)


def test_no_guess_fails():
    with patch("chardet.detect", return_value={"encoding": None, "confidence": 0.0}):
        with pytest.raises(DetectionFailed):
            detect_chardet(b"\x81\x82")


def test_threshold_comes_from_settings(monkeypatch):
    from goatee.config import reset_settings

    monkeypatch.setenv("GOATEE_DETECT__MIN_CONFIDENCE", "0.95")
    reset_settings()
    with patch("chardet.detect", return_value={"encoding": "windows-1251", "confidence": 0.9}):
        with pytest.raises(DetectionFailed):
            detect_chardet(b"\xcf\xf0\xe8")


def test_chardet_ascii_normalized():
    with patch("chardet.detect", return_value={"encoding": "ascii", "confidence": 1.0}):
        assert detect_chardet(b"plain") == "utf-8"
