"""Shift-JIS text codec.

Every name and string in PAC and TTP files is Shift-JIS. The games were
authored on Windows, so the Microsoft code page 932 table is used; it is a
superset of JIS X 0208 Shift-JIS and matches the WHATWG ``Shift_JIS`` decoder.

Both directions are strict: a byte sequence that needs a replacement
character, or a character with no Shift-JIS form, is an error rather than a
silent substitution, so that names always round-trip exactly.
"""

from ..exceptions import EncodingError, NameTooLongError

SHIFT_JIS = "cp932"


def decode(data: bytes) -> str:
    """Decode Shift-JIS bytes into a string."""
    try:
        return bytes(data).decode(SHIFT_JIS)
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Invalid Shift-JIS sequence at byte {e.start}: {bytes(data)!r}"
        ) from e


def decode_fixed(data: bytes) -> str:
    """Decode a zero-padded fixed-width field, stopping at the first zero byte."""
    end = data.find(b"\x00")
    if end != -1:
        data = data[:end]
    return decode(data)


def encode(text: str) -> bytes:
    """Encode a string as Shift-JIS."""
    try:
        return text.encode(SHIFT_JIS)
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Character {text[e.start:e.end]!r} in {text!r} has no Shift-JIS representation"
        ) from e


def encode_fixed(text: str, width: int) -> bytes:
    """Encode a string into a zero-padded field of ``width`` bytes.

    At least one zero byte must remain after the name, so the encoded text
    has to be strictly shorter than the field.
    """
    encoded = encode(text)
    if b"\x00" in encoded:
        raise EncodingError(f"Name {text!r} contains a NUL character")
    if len(encoded) >= width:
        raise NameTooLongError(text, len(encoded), width)
    return encoded.ljust(width, b"\x00")
