"""Binary <-> hex-dump text.

The dump is one line per ``group_size`` bytes, each byte as two lowercase
hex digits separated by single spaces, lines joined with LF::

    de ad be ef 00 01
"""

from __future__ import annotations

import re

from goatee.errors import InvalidHexError

_WHITESPACE = re.compile(r"\s+")


def encode(data: bytes, group_size: int = 16) -> str:
    """Render *data* as hex-dump text, ``group_size`` bytes per line."""
    if group_size < 1:
        raise ValueError(f"group_size must be >= 1, got {group_size}")
    return "\n".join(
        data[i : i + group_size].hex(" ") for i in range(0, len(data), group_size)
    )


def decode(text: str) -> bytes:
    """Parse hex-dump text back into bytes, ignoring all whitespace."""
    digits = _WHITESPACE.sub("", text)
    try:
        return bytes.fromhex(digits)
    except ValueError as e:
        raise InvalidHexError("invalid hex string", cause=e) from e
