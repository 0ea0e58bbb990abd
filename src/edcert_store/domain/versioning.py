"""
Version negotiation — decides whether a blob's format version is readable.

Rule: a found version is compatible iff it has the same major version as the
anchor (the oldest version this reader still commits to) and is not older
than the anchor. Newer minor/patch revisions of the same major are accepted;
any other major, older or newer, is rejected.

    anchor 1.0.0:  0.9.0 ✗   1.0.0 ✓   1.4.2 ✓   2.0.0 ✗

Implemented as an explicit ordered-triple comparison plus a same-major check,
with no general-purpose semver range matching.
"""

from __future__ import annotations

import structlog
from railway import ErrorCode
from railway.result import Result

from edcert_store.domain.failures import FormatFailure
from edcert_store.domain.models import LEGACY_VERSION, VersionTriple

log = structlog.get_logger()

# Written into every blob produced by this implementation.
CURRENT_VERSION = VersionTriple(1, 1, 0)

# Oldest version still readable; the legacy marker resolves to it.
ANCHOR_VERSION = LEGACY_VERSION


class VersionNegotiator:
    """Same-major, not-older-than-anchor compatibility check."""

    def __init__(self, anchor: VersionTriple = ANCHOR_VERSION) -> None:
        self._anchor = anchor

    @property
    def anchor(self) -> VersionTriple:
        return self._anchor

    @property
    def requirement(self) -> str:
        """Human-readable accepted range, e.g. '>=1.0.0, <2.0.0'."""
        return f">={self._anchor}, <{self._anchor.major + 1}.0.0"

    def is_compatible(self, found: VersionTriple) -> bool:
        if found.major != self._anchor.major:
            return False
        return found >= self._anchor

    def check(self, found: VersionTriple) -> Result[VersionTriple]:
        """
        Return Success(found) when readable.

        Otherwise returns Result.failure(BUSINESS_RULE_ERROR) with reason
        INCOMPATIBLE_VERSION and the found/required versions in `details`.
        """
        if self.is_compatible(found):
            return Result.success(found)

        log.warning("codec.version_rejected", found=str(found), required=self.requirement)
        return Result.failure(
            ErrorCode.BUSINESS_RULE_ERROR,
            f"Certificate format version {found} is incompatible, required {self.requirement}",
            reason=FormatFailure.INCOMPATIBLE_VERSION,
            details={"found": found, "required": self.requirement},
        )
