"""
End-to-end BDD acceptance tests for edcert-store.

Exercises the fully wired store (composition root → file store → codec →
XZ + pydantic adapters) against a real temporary filesystem, using freshly
generated Ed25519 certificates.

Each test follows Given/When/Then BDD structure in its docstring.

Markers: @pytest.mark.acceptance
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from railway import ErrorCode, ResultAssertions

from edcert_store.adapters.file_store import CERTIFICATE_FILENAME, PRIVATE_KEY_FILENAME, CertificateStore
from edcert_store.adapters.xz_compressor import XzCompressor
from edcert_store.bootstrap import create_store
from edcert_store.config import StoreSettings
from edcert_store.domain.failures import FormatFailure
from edcert_store.domain.models import Certificate

pytestmark = pytest.mark.acceptance


@pytest.fixture()
def wired_store() -> CertificateStore[Certificate]:
    return create_store(StoreSettings(_env_file=None, log_level="WARNING"))  # type: ignore[call-arg]


@pytest.fixture()
def generated_cert() -> Certificate:
    expires = (datetime.now(UTC) + timedelta(days=90)).replace(microsecond=0)
    return Certificate.generate({"name": "gateway", "env": "staging"}, expires)


class TestFolderLifecycle:
    def test_generated_certificate_survives_save_and_load(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        """
        GIVEN a freshly generated certificate with its Ed25519 private key
        WHEN it is saved to a folder and loaded back
        THEN the loaded certificate equals the original, private key included.
        """
        folder = tmp_path / "certs" / "gateway"

        ResultAssertions.assert_success(wired_store.save_to_folder(generated_cert, folder))
        loaded = ResultAssertions.assert_success(wired_store.load_from_folder(folder))

        assert loaded == generated_cert
        assert (folder / PRIVATE_KEY_FILENAME).read_bytes() == generated_cert.private_key()

    def test_public_copy_can_be_distributed_without_key(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        """
        GIVEN a certificate saved to a folder
        WHEN only certificate.edc is copied to another folder and loaded
        THEN the copy loads as a public-only certificate with identical public material.
        """
        source = tmp_path / "source"
        public = tmp_path / "public"
        ResultAssertions.assert_success(wired_store.save_to_folder(generated_cert, source))
        public.mkdir()
        (public / CERTIFICATE_FILENAME).write_bytes((source / CERTIFICATE_FILENAME).read_bytes())

        loaded = ResultAssertions.assert_success(wired_store.load_from_folder(public))

        assert not loaded.has_private_key()
        assert loaded.public_key == generated_cert.public_key
        assert loaded.meta == generated_cert.meta

    def test_resaving_public_copy_leaves_existing_key_untouched(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        ResultAssertions.assert_success(wired_store.save_to_folder(generated_cert, tmp_path))
        public_only = ResultAssertions.assert_success(wired_store.load_from_file(tmp_path / CERTIFICATE_FILENAME))

        ResultAssertions.assert_success(wired_store.save_to_folder(public_only, tmp_path))

        assert (tmp_path / PRIVATE_KEY_FILENAME).read_bytes() == generated_cert.private_key()


class TestFormatCompatibility:
    def test_legacy_file_on_disk_is_readable(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        """
        GIVEN a certificate.edc written in the legacy layout (b"edcert" over the XZ magic)
        WHEN the folder is loaded
        THEN the certificate is decoded as format 1.0.0.
        """
        stream = XzCompressor().compress(generated_cert.model_dump_json().encode("utf-8"), 6)
        (tmp_path / CERTIFICATE_FILENAME).write_bytes(b"edcert" + stream[6:])

        header = ResultAssertions.assert_success(wired_store.inspect_file(tmp_path / CERTIFICATE_FILENAME))
        loaded = ResultAssertions.assert_success(wired_store.load_from_folder(tmp_path))

        assert header.is_legacy
        assert loaded.public_key == generated_cert.public_key

    def test_file_from_future_major_asks_for_upgrade(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        """
        GIVEN a certificate file whose header declares format 2.0.0
        WHEN it is loaded
        THEN the failure is INCOMPATIBLE_VERSION, distinct from corruption.
        """
        path = tmp_path / CERTIFICATE_FILENAME
        ResultAssertions.assert_success(wired_store.save_to_file(generated_cert, path))
        blob = bytearray(path.read_bytes())
        blob[3:6] = b"\x02\x00\x00"
        path.write_bytes(bytes(blob))

        error = ResultAssertions.assert_failure(wired_store.load_from_file(path), ErrorCode.BUSINESS_RULE_ERROR)
        assert error.reason is FormatFailure.INCOMPATIBLE_VERSION

    def test_corrupted_file_is_reported_as_corruption(
        self, wired_store: CertificateStore[Certificate], generated_cert: Certificate, tmp_path: Path
    ) -> None:
        path = tmp_path / CERTIFICATE_FILENAME
        ResultAssertions.assert_success(wired_store.save_to_file(generated_cert, path))
        blob = bytearray(path.read_bytes())
        blob[len(blob) // 2] ^= 0x5A
        path.write_bytes(bytes(blob))

        error = ResultAssertions.assert_failure(wired_store.load_from_file(path), ErrorCode.VALIDATION_ERROR)
        assert error.reason in (FormatFailure.DECOMPRESSION_FAILED, FormatFailure.MALFORMED_CERTIFICATE)
