"""
Failure reasons — the precise kinds of failure attached to railway Results.

The railway ErrorCode says what CATEGORY of problem occurred (bad input,
infrastructure, broken caller contract). The reason says exactly WHICH step
failed, so callers can react differently to e.g. an incompatible format
version ("upgrade the tool") and a malformed certificate ("corrupt file").
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class FormatFailure(Enum):
    """Why a blob could not be decoded into a certificate."""

    TRUNCATED_HEADER = "TRUNCATED_HEADER"
    """Blob is shorter than the 6-byte format header."""

    INCOMPATIBLE_VERSION = "INCOMPATIBLE_VERSION"
    """Header declares a format version this reader does not support."""

    DECOMPRESSION_FAILED = "DECOMPRESSION_FAILED"
    """Payload is not a valid compressed stream once the magic bytes are restored."""

    INVALID_ENCODING = "INVALID_ENCODING"
    """Decompressed bytes are not valid UTF-8."""

    MALFORMED_CERTIFICATE = "MALFORMED_CERTIFICATE"
    """Text does not deserialize into a certificate."""


@unique
class StoreFailure(Enum):
    """Why a certificate or private key could not be saved or loaded."""

    FOLDER_CREATION_FAILED = "FOLDER_CREATION_FAILED"
    CERTIFICATE_WRITE_FAILED = "CERTIFICATE_WRITE_FAILED"
    PRIVATE_KEY_WRITE_FAILED = "PRIVATE_KEY_WRITE_FAILED"
    FILE_OPEN_FAILED = "FILE_OPEN_FAILED"
    FILE_READ_FAILED = "FILE_READ_FAILED"
    NO_PRIVATE_KEY = "NO_PRIVATE_KEY"
