"""
Format codec — converts a certificate to/from one versioned, compressed blob.

Encoding:

  certificate
    → serializer.to_text()         (JSON text)
      → UTF-8 bytes
        → compressor.compress()    (XZ stream, starts with its 6 magic bytes)
          → stamp_header()         (magic replaced by marker + version triple)

Decoding runs the same railway backwards; each stage returns Result[T] and
the first failing stage short-circuits with its own FormatFailure reason:

  read_header()                    → TRUNCATED_HEADER
    → negotiator.check()           → INCOMPATIBLE_VERSION
      → restore_compression_header()
        → compressor.decompress()  → DECOMPRESSION_FAILED
          → UTF-8 decode           → INVALID_ENCODING
            → serializer.from_text() → MALFORMED_CERTIFICATE

The compressor's magic bytes are a known constant. The blob carries its
version at a fixed offset and becomes a valid compressed stream again once
the magic is spliced back in.

Encoding failures are NOT turned into Results. A well-formed certificate
must always serialize and compress; if it doesn't, the implementation is
broken and the exception propagates.
"""

from __future__ import annotations

from typing import Generic

import structlog
from railway import ErrorCode
from railway.result import Result

from edcert_store.domain.failures import FormatFailure
from edcert_store.domain.models import (
    CURRENT_MARKER,
    HEADER_SIZE,
    LEGACY_MARKER,
    LEGACY_VERSION,
    MARKER_SIZE,
    FormatHeader,
    VersionTriple,
)
from edcert_store.domain.ports import C, CertificateSerializer, Compressor
from edcert_store.domain.versioning import CURRENT_VERSION, VersionNegotiator

log = structlog.get_logger()

DEFAULT_COMPRESSION_LEVEL = 6


# ─────────────────────── Header Splicing ───────────────────────


def stamp_header(stream: bytes, version: VersionTriple = CURRENT_VERSION) -> bytes:
    """
    Return a copy of `stream` with bytes 0-5 replaced by marker + version.

    Raises ValueError if the stream is shorter than the header.
    """
    if len(stream) < HEADER_SIZE:
        raise ValueError(f"Compressed stream too short for header: {len(stream)} bytes")
    return CURRENT_MARKER + version.to_bytes() + bytes(stream[HEADER_SIZE:])


def restore_compression_header(blob: bytes, magic: bytes) -> bytes:
    """Return a copy of `blob` with bytes 0-5 replaced by the compressor's magic."""
    if len(magic) != HEADER_SIZE:
        raise ValueError(f"Compressor magic must be {HEADER_SIZE} bytes, got {len(magic)}")
    return bytes(magic) + bytes(blob[HEADER_SIZE:])


def read_header(blob: bytes) -> Result[FormatHeader]:
    """
    Decode the 6-byte format header without touching the payload.

    The legacy marker always resolves to version 1.0.0. Any other marker is
    read as current-format: its version comes from bytes 3-5.
    """
    if len(blob) < HEADER_SIZE:
        return Result.failure(
            ErrorCode.VALIDATION_ERROR,
            f"Certificate blob is {len(blob)} bytes, shorter than the {HEADER_SIZE}-byte header",
            reason=FormatFailure.TRUNCATED_HEADER,
            details={"size": len(blob)},
        )

    marker = bytes(blob[:MARKER_SIZE])
    if marker == LEGACY_MARKER:
        return Result.success(FormatHeader(marker=marker, version=LEGACY_VERSION))

    if marker != CURRENT_MARKER:
        log.warning("codec.unknown_marker", marker=marker.hex())
    version = VersionTriple.from_bytes(bytes(blob[MARKER_SIZE:HEADER_SIZE]))
    return Result.success(FormatHeader(marker=marker, version=version))


def _decode_utf8(raw: bytes) -> Result[str]:
    return Result.from_computation(
        lambda: raw.decode("utf-8"),
        ErrorCode.VALIDATION_ERROR,
        "Decompressed certificate is not valid UTF-8",
        reason=FormatFailure.INVALID_ENCODING,
    )


# ─────────────────────── Codec ───────────────────────


class FormatCodec(Generic[C]):
    """
    Encode certificates to versioned blobs and decode them back.

    Collaborators are injected as ports, so the codec runs against fakes in
    tests and against XzCompressor + PydanticJsonSerializer in production.
    """

    def __init__(
        self,
        compressor: Compressor,
        serializer: CertificateSerializer[C],
        negotiator: VersionNegotiator | None = None,
        level: int = DEFAULT_COMPRESSION_LEVEL,
    ) -> None:
        self._compressor = compressor
        self._serializer = serializer
        self._negotiator = negotiator or VersionNegotiator()
        self._level = level

    @property
    def negotiator(self) -> VersionNegotiator:
        return self._negotiator

    def encode(self, cert: C) -> bytes:
        """Serialize, compress and stamp the current format header."""
        text = self._serializer.to_text(cert)
        stream = self._compressor.compress(text.encode("utf-8"), self._level)
        blob = stamp_header(stream)
        log.debug("codec.encoded", version=str(CURRENT_VERSION), size_bytes=len(blob))
        return blob

    def decode(self, blob: bytes) -> Result[C]:
        """
        Reconstruct a certificate from a blob produced by `encode`.

        Returns Result[C] on success, or the failure of the first stage that
        rejected the blob, tagged with its FormatFailure reason.
        """
        return (
            read_header(blob)
            .flat_map(lambda header: self._negotiator.check(header.version))
            .map(lambda _: restore_compression_header(blob, self._compressor.magic))
            .flat_map(self._decompress)
            .flat_map(_decode_utf8)
            .flat_map(self._deserialize)
            .peek(lambda _: log.debug("codec.decoded", size_bytes=len(blob)))
        )

    def _decompress(self, stream: bytes) -> Result[bytes]:
        return Result.from_computation(
            lambda: self._compressor.decompress(stream),
            ErrorCode.VALIDATION_ERROR,
            "Failed to decompress certificate",
            reason=FormatFailure.DECOMPRESSION_FAILED,
        )

    def _deserialize(self, text: str) -> Result[C]:
        return Result.from_computation(
            lambda: self._serializer.from_text(text),
            ErrorCode.VALIDATION_ERROR,
            "Failed to deserialize certificate",
            reason=FormatFailure.MALFORMED_CERTIFICATE,
        )
