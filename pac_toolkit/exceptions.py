"""Exceptions raised by the PAC toolkit."""

from typing import Optional


class PACError(Exception):
    """Base class for all toolkit errors."""


class FormatError(PACError, ValueError):
    """Malformed binary structure in an archive or TTP file."""


class TruncatedError(FormatError, EOFError):
    """The byte source ended before a structure was complete."""

    def __init__(self, offset: int, expected: int, actual: int, what: Optional[str] = None):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        self.what = what
        message = f"Expected {expected} bytes at offset 0x{offset:X}, got {actual}"
        if what:
            message = f"{message} (reading {what})"
        super().__init__(message)


class InvalidBodyError(FormatError):
    """A compressed body is smaller than its own fixed header."""


class EncodingError(PACError, ValueError):
    """Text could not be converted to or from Shift-JIS."""


class NameTooLongError(EncodingError):
    """An encoded name does not fit in its fixed-width slot."""

    def __init__(self, name: str, encoded_size: int, width: int):
        self.name = name
        self.encoded_size = encoded_size
        self.width = width
        super().__init__(
            f"Entry name too long: {name!r} is {encoded_size} bytes encoded, "
            f"must be less than {width}"
        )


class CompressionError(PACError, ValueError):
    """A zlib stream could not be inflated."""


class PackError(PACError):
    """The source directory cannot be packed into an archive."""
