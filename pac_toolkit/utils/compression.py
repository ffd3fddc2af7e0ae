"""zlib helpers for BMZ bitmap bodies."""

import zlib

from ..exceptions import CompressionError

# Level used by the game's own packer
DEFAULT_LEVEL = 6


def inflate(data: bytes) -> bytes:
    """Inflate a complete zlib stream."""
    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(data)
        result += decompressor.flush()
    except zlib.error as e:
        raise CompressionError(f"Failed to inflate zlib stream: {e}") from e

    if not decompressor.eof:
        raise CompressionError(
            f"Incomplete zlib stream ({len(data)} bytes, inflated {len(result)})"
        )
    return result


def deflate(data: bytes, level: int = DEFAULT_LEVEL) -> bytes:
    """Deflate bytes into a zlib stream."""
    return zlib.compress(data, level)
