"""
Failure description — structured error information for the failure track.

An ErrorCode gives the coarse category (maps naturally onto HTTP status
ranges), while an optional `reason` carries the precise, domain-specific kind
of failure so callers can branch on it without parsing messages:

    desc = FailureDescription(
        ErrorCode.VALIDATION_ERROR,
        "Blob shorter than header",
        reason=FormatFailure.TRUNCATED_HEADER,
    )
    if desc.reason is FormatFailure.TRUNCATED_HEADER: ...

`details` holds structured context (e.g. found/required versions) that would
otherwise be flattened into the message.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Any, Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Organized by HTTP status range for natural REST API mapping:
    - Client errors (4xx): VALIDATION, AUTHENTICATION, AUTHORIZATION, NOT_FOUND, BUSINESS_RULE, RATE_LIMIT
    - Server errors (5xx): TECHNICAL, DATABASE, CONFIGURATION, EXTERNAL_SERVICE, UNAVAILABLE, TIMEOUT, UNKNOWN
    """

    # --- Client-side errors (4xx HTTP range) ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Invalid input format, corrupt data, type mismatches (→ 400)."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    """Invalid credentials, expired tokens (→ 401)."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions (→ 403)."""

    NOT_FOUND = "NOT_FOUND"
    """Resource doesn't exist (→ 404)."""

    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"
    """Domain invariant violated, caller contract broken (→ 409)."""

    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    """Request limits exceeded (→ 429)."""

    # --- Server-side errors (5xx HTTP range) ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Infrastructure issues: filesystem, OS (→ 500)."""

    DATABASE_ERROR = "DATABASE_ERROR"
    """Database connectivity or query failures (→ 500)."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """System misconfiguration (→ 500)."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """External API call failures (→ 502)."""

    SERVICE_UNAVAILABLE_ERROR = "SERVICE_UNAVAILABLE_ERROR"
    """Service maintenance or overload (→ 503)."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Operation exceeded time limit (→ 504)."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures (→ 500)."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message, reason, details, exception, timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'Name is required'
    >>> desc.reason is None
    True
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    reason: Optional[Enum] = None
    details: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
        reason: Optional[Enum] = None,
        details: Optional[Mapping[str, Any]] = None,
    ) -> FailureDescription:
        """Factory method with optional reason and details."""
        return FailureDescription(
            code=code,
            message=message,
            exception=exception,
            reason=reason,
            details=dict(details or {}),
        )

    def full_stack_trace(self) -> str:
        """Full stack trace string including the message and exception chain."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"
