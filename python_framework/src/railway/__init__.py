"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def require_header(blob: bytes) -> Result[bytes]:
        if len(blob) < 6:
            return Result.failure(ErrorCode.VALIDATION_ERROR, "Blob shorter than header")
        return Result.success(blob)

    result = (
        Result.success(b"EDC\\x01\\x01\\x00...")
        .flat_map(require_header)
        .map(lambda blob: blob[:6])
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultAssertions",
]

__version__ = "1.1.0"
