"""
Filesystem store adapter — saves and loads certificates as files in a folder.

Folder layout written by `save_to_folder`:

  <folder>/
    certificate.edc   FormatCodec blob (header + compressed JSON)
    private.key       raw private key bytes, only if the certificate has one

The two halves fail independently: every step returns Result[T] tagged with
a StoreFailure reason, and codec failures pass through unchanged. A missing
private.key on load is not an error; most stored certificates are public-only.

There is no locking and no atomic write: two concurrent saves to one folder
may interleave. Callers that need atomicity serialize externally or write to
a staging folder and rename it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generic

import structlog
from railway import ErrorCode, FailureDescription
from railway.result import Result

from edcert_store.codec import FormatCodec, read_header
from edcert_store.domain.failures import StoreFailure
from edcert_store.domain.models import HEADER_SIZE, FormatHeader
from edcert_store.domain.ports import C

log = structlog.get_logger()

CERTIFICATE_FILENAME = "certificate.edc"
PRIVATE_KEY_FILENAME = "private.key"


# ─────────────────────── File Primitives ───────────────────────


def _write_bytes(path: Path, data: bytes, reason: StoreFailure, what: str) -> Result[Path]:
    """Write `data` to `path`, replacing any existing file."""

    def write() -> Path:
        with path.open("wb") as fh:
            fh.write(data)
        return path

    return Result.from_computation(
        write,
        ErrorCode.TECHNICAL_ERROR,
        f"Failed to write {what} to {path}",
        reason=reason,
    )


def _read_bytes(path: Path, size: int = -1) -> Result[bytes]:
    """
    Read up to `size` bytes (all by default) from `path`.

    Opening and reading fail with distinct reasons. A missing file is
    reported as NOT_FOUND so callers can treat it as optional.
    """
    try:
        fh = path.open("rb")
    except OSError as e:
        code = ErrorCode.NOT_FOUND if isinstance(e, FileNotFoundError) else ErrorCode.TECHNICAL_ERROR
        return Result.failure(
            code,
            f"Failed to open {path}",
            e,
            reason=StoreFailure.FILE_OPEN_FAILED,
        )

    with fh:
        return Result.from_computation(
            lambda: fh.read(size),
            ErrorCode.TECHNICAL_ERROR,
            f"Failed to read {path}",
            reason=StoreFailure.FILE_READ_FAILED,
        )


def _is_missing_file(error: FailureDescription) -> bool:
    return error.reason is StoreFailure.FILE_OPEN_FAILED and error.code is ErrorCode.NOT_FOUND


def _create_folder(folder: Path) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    return folder


# ─────────────────────── Public Store Class ───────────────────────


class CertificateStore(Generic[C]):
    """
    Persist certificates to the filesystem through a FormatCodec.

    Stateless apart from the injected codec: every operation is a function of
    its explicit arguments. File handles are scoped to `with` blocks.
    """

    def __init__(self, codec: FormatCodec[C]) -> None:
        self._codec = codec

    # ── Folder operations ──

    def save_to_folder(self, cert: C, folder: str | Path) -> Result[Path]:
        """
        Save the certificate (and its private key, if any) into `folder`.

        Flow:
          1. Create the folder if absent      → FOLDER_CREATION_FAILED
          2. Write private.key if cert has one → PRIVATE_KEY_WRITE_FAILED
          3. Write certificate.edc            → CERTIFICATE_WRITE_FAILED

        Returns Result[Path] with the folder on success.
        """
        folder = Path(folder)
        return (
            Result.from_computation(
                lambda: _create_folder(folder),
                ErrorCode.TECHNICAL_ERROR,
                f"Failed to create folder {folder}",
                reason=StoreFailure.FOLDER_CREATION_FAILED,
            )
            .flat_map(lambda _: self._save_private_key_if_present(cert, folder / PRIVATE_KEY_FILENAME))
            .flat_map(lambda _: self.save_to_file(cert, folder / CERTIFICATE_FILENAME))
            .map(lambda _: folder)
            .peek(lambda _: log.info("store.saved", folder=str(folder), private_key=cert.has_private_key()))
        )

    def load_from_folder(self, folder: str | Path) -> Result[C]:
        """
        Load a certificate saved with `save_to_folder`.

        The private key is attached when private.key exists. A missing key
        file yields a public-only certificate; a key file that exists but
        cannot be read is a failure.
        """
        folder = Path(folder)
        key_path = folder / PRIVATE_KEY_FILENAME
        return (
            self.load_from_file(folder / CERTIFICATE_FILENAME)
            .flat_map(
                lambda cert: self.load_private_key(cert, key_path).recover_if(
                    _is_missing_file,
                    lambda _: self._public_only(cert, key_path),
                )
            )
            .peek(lambda cert: log.info("store.loaded", folder=str(folder), private_key=cert.has_private_key()))
        )

    # ── Single-file operations ──

    def save_to_file(self, cert: C, path: str | Path) -> Result[Path]:
        """Encode the certificate and write the blob to `path`."""
        path = Path(path)
        blob = self._codec.encode(cert)
        return _write_bytes(path, blob, StoreFailure.CERTIFICATE_WRITE_FAILED, "certificate").peek(
            lambda _: log.debug("store.certificate_written", path=str(path), size_bytes=len(blob))
        )

    def load_from_file(self, path: str | Path) -> Result[C]:
        """
        Read and decode a certificate blob.

        Failures: FILE_OPEN_FAILED, FILE_READ_FAILED, or any FormatFailure
        from the codec.
        """
        path = Path(path)
        return _read_bytes(path).flat_map(self._codec.decode)

    def inspect_file(self, path: str | Path) -> Result[FormatHeader]:
        """Read only the format header of a stored certificate."""
        return _read_bytes(Path(path), HEADER_SIZE).flat_map(read_header)

    # ── Private key operations ──

    def save_private_key(self, cert: C, path: str | Path) -> Result[Path]:
        """
        Write the raw private key bytes to `path`.

        Calling this for a certificate without a private key breaks the
        caller contract and fails with NO_PRIVATE_KEY.
        """
        path = Path(path)
        key = cert.private_key() if cert.has_private_key() else None
        return Result.from_optional(
            key,
            "The certificate has no private key",
            ErrorCode.BUSINESS_RULE_ERROR,
            reason=StoreFailure.NO_PRIVATE_KEY,
        ).flat_map(
            lambda raw: _write_bytes(path, raw, StoreFailure.PRIVATE_KEY_WRITE_FAILED, "private key")
        )

    def load_private_key(self, cert: C, path: str | Path) -> Result[C]:
        """
        Read raw private key bytes from `path` and attach them to `cert`.

        The key format is not validated here; that is the certificate's job.
        """
        return _read_bytes(Path(path)).map(lambda raw: self._attach_private_key(cert, raw))

    # ── Helpers ──

    def _save_private_key_if_present(self, cert: C, path: Path) -> Result[Path]:
        """Success(path) whether or not a key was written."""
        if not cert.has_private_key():
            return Result.success(path)
        return self.save_private_key(cert, path)

    @staticmethod
    def _attach_private_key(cert: C, raw: bytes) -> C:
        cert.set_private_key(raw)
        return cert

    @staticmethod
    def _public_only(cert: C, key_path: Path) -> C:
        log.debug("store.private_key_absent", path=str(key_path))
        return cert
