"""
edcert_store — versioned binary persistence for Ed25519 certificates.

Encodes a certificate as JSON, compresses it into an XZ stream, and stamps a
6-byte format header (marker + version triple) over the stream's magic bytes.
Certificates are stored in a folder as certificate.edc plus an optional raw
private.key.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "1.1.0"
