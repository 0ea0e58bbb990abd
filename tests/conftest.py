"""
Shared test fixtures and helpers for the edcert-store test suite.

Provides deterministic certificates (public-only and with a private key)
and a codec/store wired with the real XZ and pydantic adapters.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from edcert_store.adapters.file_store import CertificateStore
from edcert_store.adapters.json_serializer import PydanticJsonSerializer
from edcert_store.adapters.xz_compressor import XzCompressor
from edcert_store.codec import FormatCodec
from edcert_store.domain.models import Certificate, Signature

EXPIRES = datetime(2030, 1, 1, 12, 0, 0, tzinfo=UTC)
PUBLIC_KEY = bytes(range(32))
PRIVATE_KEY = bytes(range(100, 132))


def make_certificate(with_private_key: bool = False) -> Certificate:
    """Create a deterministic certificate, optionally carrying a private key."""
    cert = Certificate(
        meta={"name": "alice", "role": "signer"},
        public_key=PUBLIC_KEY,
        expires=EXPIRES,
        signature=Signature(
            digest=b"\x01" * 64,
            value=b"\x02" * 64,
            signed_by=b"\x03" * 32,
        ),
    )
    if with_private_key:
        cert.set_private_key(PRIVATE_KEY)
    return cert


@pytest.fixture()
def public_cert() -> Certificate:
    """A certificate without a private key."""
    return make_certificate()


@pytest.fixture()
def keyed_cert() -> Certificate:
    """A certificate carrying a private key."""
    return make_certificate(with_private_key=True)


@pytest.fixture()
def codec() -> FormatCodec[Certificate]:
    """A FormatCodec wired with the production adapters."""
    return FormatCodec(XzCompressor(), PydanticJsonSerializer(Certificate))


@pytest.fixture()
def store(codec: FormatCodec[Certificate]) -> CertificateStore[Certificate]:
    """A CertificateStore backed by the real codec."""
    return CertificateStore(codec)


@pytest.fixture()
def cert_factory() -> Callable[..., Certificate]:
    """Factory fixture: build a fresh certificate, with or without a private key."""
    return make_certificate
