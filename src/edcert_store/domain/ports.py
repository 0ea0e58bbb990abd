"""
Ports — Protocol-based interfaces for the codec's collaborators.

These define WHAT the codec and store need without specifying HOW it's done:

  Codec/Store ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters, and test fakes,
satisfy the contract simply by implementing the methods — no inheritance.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

C = TypeVar("C", bound="PrivateKeyHolder")


@runtime_checkable
class PrivateKeyHolder(Protocol):
    """
    Port: the narrow capability contract the store needs from a certificate.

    Everything else about the certificate (public key, metadata, signature,
    expiry) is only seen through the text serializer.
    """

    def has_private_key(self) -> bool: ...

    def private_key(self) -> bytes | None: ...

    def set_private_key(self, key: bytes) -> None: ...


@runtime_checkable
class CertificateSerializer(Protocol[C]):
    """
    Port: bijective text serialization of a certificate.

    `from_text` raises on malformed input; the codec turns that into a
    MALFORMED_CERTIFICATE failure.
    """

    def to_text(self, cert: C) -> str: ...

    def from_text(self, text: str) -> C: ...


@runtime_checkable
class Compressor(Protocol):
    """
    Port: one-shot byte-stream compression.

    Every stream produced by `compress` starts with the same fixed `magic`
    bytes (exactly HEADER_SIZE long). The codec overwrites them with its own
    header and restores them before calling `decompress`, which raises on a
    corrupt stream.
    """

    @property
    def magic(self) -> bytes: ...

    def compress(self, data: bytes, level: int) -> bytes: ...

    def decompress(self, data: bytes) -> bytes: ...
