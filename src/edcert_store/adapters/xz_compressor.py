"""
XZ compression adapter — implements the Compressor port with stdlib lzma.

Every XZ stream begins with the same 6-byte magic (FD 37 7A 58 5A 00),
followed by stream flags and a CRC32 of those flags. The magic is the part
the codec overwrites with its own format header; everything after it is
left intact, so restoring the magic yields the original, checksummed stream.

Exceptions are NOT caught here: the codec decides whether a failure is a
recoverable decode error or a fatal encode fault.
"""

from __future__ import annotations

import lzma

XZ_MAGIC = b"\xfd7zXZ\x00"


class XzCompressor:
    """
    Compress and decompress single XZ streams.

    Implements the Compressor port.
    """

    @property
    def magic(self) -> bytes:
        return XZ_MAGIC

    def compress(self, data: bytes, level: int) -> bytes:
        """Compress into one XZ stream; `level` is the lzma preset (0-9)."""
        return lzma.compress(data, format=lzma.FORMAT_XZ, preset=level)

    def decompress(self, data: bytes) -> bytes:
        """Decompress an XZ stream. Raises lzma.LZMAError on corrupt input."""
        return lzma.decompress(data, format=lzma.FORMAT_XZ)
