"""Playwright-based retrieval of the BSI list of certified TSE.

Workflow:

- Launch headless Chromium (``BrowserSession``).
- Work out how many pages the list spans, unless a page count was given
  (``PaginationDetector``).
- Load each page in turn, wait for the ``table.textualData`` rows and parse
  them into :class:`~tse_id.retrieval.records.Record` objects
  (``PageFetcher``); pages that fail are skipped (``Aggregator``).
- Close the browser. Any attempt-level failure closes the browser, backs off
  linearly and starts again from scratch, up to ``max_attempts`` times.

``retrieve()`` is the library entry point used by the command line.
"""
from __future__ import annotations

import time
from typing import Any, Mapping, Optional

from . import config
from .aggregator import Aggregator
from .config import RetrievalOptions, build_options
from .config_validation import validate_options
from .errors import NotInitializedError, RetrievalExhaustedError, error_code_for
from .fetcher import PageFetcher
from .logging_utils import _retrieval_event
from .pagination import PaginationDetector
from .records import RecordCollection
from .retry_policy import NON_RETRYABLE_ERROR_CODES, compute_backoff_seconds, decide_retry
from .selectors import TSE_LIST_SELECTORS, TseListSelectors
from .session import BrowserSession
from .utils import log_line, short_error_message


class Retriever:
    def __init__(
        self,
        options: Optional[RetrievalOptions] = None,
        *,
        session: Optional[BrowserSession] = None,
        selectors: TseListSelectors = TSE_LIST_SELECTORS,
    ) -> None:
        self.options = options or build_options()
        self.session = session or BrowserSession()
        self.fetcher = PageFetcher(self.session, self.options, selectors)
        self.detector = PaginationDetector(self.fetcher)
        self.aggregator = Aggregator(self.session, self.options, self.fetcher, self.detector)

    def initialize(self) -> None:
        self.session.initialize()

    def close(self) -> None:
        self.session.close()

    def _close_quietly(self) -> None:
        try:
            self.close()
        except Exception as exc:  # noqa: BLE001
            log_line(f"[RUN][WARN] Failed to close browser: {short_error_message(exc)}")

    def fetch_page(self, page_number: int) -> RecordCollection:
        if not self.session.is_active:
            raise NotInitializedError()
        return self.fetcher.fetch_page(page_number)

    def detect_total_pages(self) -> int:
        if not self.session.is_active:
            raise NotInitializedError()
        return self.detector.detect_total_pages()

    def retrieve_all_pages(self) -> RecordCollection:
        return self.aggregator.retrieve_all_pages()

    def with_retry(self, max_attempts: Optional[int] = None) -> RecordCollection:
        """Run initialize → retrieve_all_pages → close until one attempt succeeds.

        Raises :class:`RetrievalExhaustedError` once ``max_attempts`` attempts
        have failed. The browser is closed after every failed attempt.
        """

        attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        last_error: Optional[BaseException] = None
        for attempt in range(1, attempts + 1):
            try:
                log_line(f"[RUN] Starting retrieval attempt {attempt}/{attempts}...")
                self.initialize()
                records = self.retrieve_all_pages()
                self._close_quietly()
                log_line(f"[RUN] Retrieval completed with {len(records)} entries.")
                return records
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                log_line(f"[RUN][WARN] Attempt {attempt} failed: {short_error_message(exc)}")
                _retrieval_event(
                    "error",
                    context="run",
                    attempt=attempt,
                    max_attempts=attempts,
                    error_code=error_code_for(exc),
                    error=short_error_message(exc),
                )
                self._close_quietly()
                if not decide_retry(attempt, attempts, exc):
                    if error_code_for(exc) in NON_RETRYABLE_ERROR_CODES:
                        raise
                    break
                delay = compute_backoff_seconds(attempt)
                log_line(f"[RUN] Retrying in {delay}s...")
                time.sleep(delay)

        log_line(f"[RUN] Max attempts reached; giving up after {attempts} attempts.")
        raise RetrievalExhaustedError(attempts, last_error) from last_error


def retrieve(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    max_attempts: Optional[int] = None,
) -> RecordCollection:
    """Retrieve the full TSE list, applying ``overrides`` (url/timeout/pages)."""

    options = build_options(overrides)
    validate_options(options, "library")
    return Retriever(options).with_retry(max_attempts)


__all__ = ["Retriever", "retrieve"]
