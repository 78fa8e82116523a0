"""Error taxonomy for the content engine.

Every error is recovered at the boundary of the user action that
triggered it; none of them leave a document partially transcoded.
"""

from __future__ import annotations


class GoateeError(Exception):
    """Base class for errors surfaced to the user."""

    operation = "operation"

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}, {self.cause}"
        return message


class DetectionFailed(GoateeError):
    """Charset confidence too low; the caller treats the data as binary."""

    operation = "detect encoding"


class UnsupportedCharsetError(GoateeError):
    operation = "convert encoding"

    def __init__(self, to_charset: str, from_charset: str, *, cause: BaseException | None = None):
        super().__init__(f"unknown charsets: `{to_charset}` `{from_charset}`", cause=cause)
        self.to_charset = to_charset
        self.from_charset = from_charset


class ConversionError(GoateeError):
    operation = "convert encoding"


class InvalidHexError(GoateeError):
    operation = "decode hex"


class InvalidPatternError(GoateeError):
    operation = "search"


class FileAccessError(GoateeError):
    operation = "file access"

    def __init__(self, message: str, path: str = "", *, cause: BaseException | None = None):
        super().__init__(message, cause=cause)
        self.path = path
