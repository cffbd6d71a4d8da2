from __future__ import annotations

from typing import Literal

from .config import RetrievalOptions
from .logging_utils import _retrieval_event
from .utils import log_line

Entrypoint = Literal["library", "cli", "health", "tests"]


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _retrieval_event(
        "error",
        phase="config",
        context="options_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_line(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_options(options: RetrievalOptions, entrypoint: Entrypoint = "library") -> None:
    """Validate retrieval options for the given entrypoint.

    Raises ``ValueError`` when a blocking misconfiguration is detected.
    """

    if not isinstance(options.url, str) or not options.url.strip():
        _raise_config_error(
            "url must be a non-empty string.",
            entrypoint=entrypoint,
            error="url_missing",
        )

    if isinstance(options.timeout, bool) or not isinstance(options.timeout, int):
        _raise_config_error(
            "timeout must be an integer number of milliseconds.",
            entrypoint=entrypoint,
            error="invalid_timeout",
        )
    if options.timeout <= 0:
        _raise_config_error(
            "timeout must be greater than zero.",
            entrypoint=entrypoint,
            error="invalid_timeout",
        )

    if options.pages is not None:
        if isinstance(options.pages, bool) or not isinstance(options.pages, int):
            _raise_config_error(
                "pages must be an integer when provided.",
                entrypoint=entrypoint,
                error="invalid_pages",
            )
        if options.pages < 1:
            _raise_config_error(
                "pages must be at least 1 when provided.",
                entrypoint=entrypoint,
                error="invalid_pages",
            )


__all__ = ["validate_options", "Entrypoint"]
