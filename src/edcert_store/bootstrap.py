"""
Composition root — configures logging and wires the store's adapters.

This is the ONLY place where concrete adapters are instantiated.
The codec and store depend on Protocol ports only.

Responsibilities:
  1. Configure structlog for structured logging
  2. Load settings (or accept explicit ones)
  3. Create XzCompressor, PydanticJsonSerializer, VersionNegotiator
  4. Build FormatCodec and hand it to CertificateStore
"""

from __future__ import annotations

import logging

import structlog

from edcert_store.adapters.file_store import CertificateStore
from edcert_store.adapters.json_serializer import PydanticJsonSerializer
from edcert_store.adapters.xz_compressor import XzCompressor
from edcert_store.codec import FormatCodec
from edcert_store.config import StoreSettings
from edcert_store.domain.models import Certificate
from edcert_store.domain.versioning import VersionNegotiator


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured, human-readable console logging.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_codec(settings: StoreSettings) -> FormatCodec[Certificate]:
    """Build a FormatCodec for Certificate using the production adapters."""
    return FormatCodec(
        compressor=XzCompressor(),
        serializer=PydanticJsonSerializer(Certificate),
        negotiator=VersionNegotiator(),
        level=settings.compression_preset,
    )


def create_store(settings: StoreSettings | None = None) -> CertificateStore[Certificate]:
    """
    Wire a ready-to-use CertificateStore.

    Loads StoreSettings from the environment when none are given, and
    configures structlog at the settings' log level.
    """
    settings = settings or StoreSettings()
    configure_structlog(settings.log_level)
    structlog.get_logger().debug(
        "store.created",
        compression_preset=settings.compression_preset,
        log_level=settings.log_level,
    )
    return CertificateStore(create_codec(settings))
