from __future__ import annotations

from . import config
from .errors import ErrorCode, error_code_for
from .logging_utils import _retrieval_event

# Sequencing faults are programming errors; retrying cannot fix them.
NON_RETRYABLE_ERROR_CODES = {
    ErrorCode.NOT_INITIALIZED,
}


def compute_backoff_seconds(attempt_index: int) -> float:
    """Return the linear backoff before retrying after ``attempt_index`` (1-based)."""

    return config.RETRY_BASE_DELAY_MS * max(1, attempt_index) / 1000.0


def decide_retry(attempt_index: int, max_attempts: int, error: BaseException) -> bool:
    """Decide whether a failed retrieval attempt should be retried."""

    code = error_code_for(error)

    if code in NON_RETRYABLE_ERROR_CODES:
        _retrieval_event(
            "state",
            phase="retry_decision",
            kind="non_retryable",
            error_code=code,
            attempt=attempt_index,
            max_attempts=max_attempts,
            will_retry=False,
        )
        return False

    if attempt_index >= max_attempts:
        _retrieval_event(
            "state",
            phase="retry_decision",
            kind="capped",
            error_code=code,
            attempt=attempt_index,
            max_attempts=max_attempts,
            will_retry=False,
        )
        return False

    _retrieval_event(
        "state",
        phase="retry_decision",
        kind="retryable",
        error_code=code,
        attempt=attempt_index,
        max_attempts=max_attempts,
        will_retry=True,
        backoff_seconds=compute_backoff_seconds(attempt_index),
    )
    return True


__all__ = ["decide_retry", "compute_backoff_seconds", "NON_RETRYABLE_ERROR_CODES"]
