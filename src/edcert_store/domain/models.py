"""
Domain models — format header values and the certificate collaborator.

VersionTriple and FormatHeader are immutable value objects describing the
6-byte header that prefixes every persisted certificate blob:

    byte 0-2: marker          (b"EDC" current, or b"edc" legacy)
    byte 3-5: version triple  (major, minor, patch), meaningful for b"EDC" only
    byte 6-.: compressed stream whose own magic bytes were overwritten

Certificate is the concrete certificate collaborator: a pydantic model whose
JSON form is the text interchange format stored inside the compressed stream.
The private key is deliberately NOT part of that JSON; it lives in a separate
file and is attached after loading.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, PrivateAttr

HEADER_SIZE = 6
MARKER_SIZE = 3

# Blobs written before explicit versioning start with b"edcert".
LEGACY_MARKER = b"edc"
CURRENT_MARKER = b"EDC"


def _from_base64(value: object) -> object:
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    return value


# Raw bytes in Python, standard-alphabet Base64 text in JSON.
Base64Bytes = Annotated[
    bytes,
    BeforeValidator(_from_base64),
    PlainSerializer(lambda raw: base64.b64encode(raw).decode("ascii"), return_type=str, when_used="json"),
]


@dataclass(frozen=True, slots=True, order=True)
class VersionTriple:
    """
    Format version as (major, minor, patch), each an unsigned byte.

    Ordering is lexicographic over (major, minor, patch).
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            part = getattr(self, name)
            if not 0 <= part <= 0xFF:
                raise ValueError(f"Version {name} must fit in one byte, got {part}")

    @classmethod
    def from_bytes(cls, raw: bytes) -> VersionTriple:
        """Build a triple from exactly three header bytes."""
        if len(raw) != 3:
            raise ValueError(f"Version triple needs 3 bytes, got {len(raw)}")
        return cls(raw[0], raw[1], raw[2])

    def to_bytes(self) -> bytes:
        return bytes((self.major, self.minor, self.patch))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


LEGACY_VERSION = VersionTriple(1, 0, 0)


@dataclass(frozen=True, slots=True)
class FormatHeader:
    """The decoded first 6 bytes of a persisted blob."""

    marker: bytes
    version: VersionTriple

    @property
    def is_legacy(self) -> bool:
        return self.marker == LEGACY_MARKER


class Signature(BaseModel):
    """
    Signature material carried by a certificate.

    Opaque to this package: it is stored and restored, never verified.
    """

    model_config = ConfigDict(frozen=True)

    digest: Base64Bytes = Field(repr=False)
    value: Base64Bytes = Field(repr=False)
    signed_by: Base64Bytes | None = Field(default=None, repr=False)


class Certificate(BaseModel):
    """
    Ed25519 certificate: public key, metadata, expiry and optional signature.

    Bytes fields travel as Base64 in JSON. The private key is a private
    attribute so it never reaches the serialized text, yet still takes part
    in equality: a certificate loaded without its key differs from the one
    that was saved with it.
    """

    meta: dict[str, str] = Field(default_factory=dict)
    public_key: Base64Bytes = Field(repr=False)
    expires: datetime
    signature: Signature | None = None

    _private_key: bytes | None = PrivateAttr(default=None)

    def has_private_key(self) -> bool:
        return self._private_key is not None

    def private_key(self) -> bytes | None:
        return self._private_key

    def set_private_key(self, key: bytes) -> None:
        self._private_key = bytes(key)

    @classmethod
    def generate(cls, meta: dict[str, str], expires: datetime) -> Certificate:
        """
        Create an unsigned certificate with a fresh Ed25519 key pair.

        Both keys are stored in raw form (32 bytes each).
        """
        signing_key = Ed25519PrivateKey.generate()
        public_key = signing_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        private_key = signing_key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())

        cert = cls(meta=dict(meta), public_key=public_key, expires=expires)
        cert.set_private_key(private_key)
        return cert
