from __future__ import annotations

"""Error taxonomy for the retrieval pipeline.

Codes are included in structured logs and in the per-page failure records
kept by the aggregator, so they should stay stable.
"""

from typing import Optional


class ErrorCode:
    NOT_INITIALIZED = "not_initialized"
    LAUNCH = "launch_failed"
    NAVIGATION = "navigation_failed"
    SELECTOR_TIMEOUT = "selector_timeout"
    EXTRACTION = "extraction_failed"
    EXHAUSTED = "retries_exhausted"
    INTERNAL = "internal_error"


class RetrievalError(Exception):
    error_code: str = ErrorCode.INTERNAL

    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code


class NotInitializedError(RetrievalError):
    """A page operation was requested without a live browser session."""

    error_code = ErrorCode.NOT_INITIALIZED

    def __init__(self, message: str = "Browser not initialized. Call initialize() first.") -> None:
        super().__init__(message)


class LaunchError(RetrievalError):
    error_code = ErrorCode.LAUNCH


class NavigationError(RetrievalError):
    error_code = ErrorCode.NAVIGATION


class PageTimeoutError(RetrievalError):
    """The record table did not appear within the configured timeout."""

    error_code = ErrorCode.SELECTOR_TIMEOUT


class ExtractionError(RetrievalError):
    error_code = ErrorCode.EXTRACTION


class RetrievalExhaustedError(RetrievalError):
    """Raised once every retrieval attempt has failed."""

    error_code = ErrorCode.EXHAUSTED

    def __init__(self, attempts: int, last_error: Optional[BaseException]) -> None:
        last_message = str(last_error) if last_error is not None else "unknown"
        super().__init__(
            f"Failed to retrieve data after {attempts} attempts. Last error: {last_message}"
        )
        self.attempts = attempts
        self.last_error = last_error


def error_code_for(exc: BaseException) -> str:
    """Return the taxonomy code for ``exc``; unknown exceptions are internal."""

    if isinstance(exc, RetrievalError):
        return exc.error_code
    return ErrorCode.INTERNAL


__all__ = [
    "ErrorCode",
    "RetrievalError",
    "NotInitializedError",
    "LaunchError",
    "NavigationError",
    "PageTimeoutError",
    "ExtractionError",
    "RetrievalExhaustedError",
    "error_code_for",
]
