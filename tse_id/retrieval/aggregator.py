"""Drive the fetcher across every page and merge the results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .config import RetrievalOptions
from .errors import NotInitializedError, error_code_for
from .fetcher import PageFetcher
from .logging_utils import _retrieval_event
from .pagination import PaginationDetector
from .records import RecordCollection, merge_records
from .session import BrowserSession
from .utils import log_line, short_error_message


@dataclass
class PageFailure:
    page: int
    error_code: str
    message: str


class Aggregator:
    """Sequential, failure-tolerant retrieval of all pages.

    Pages are fetched one after another; a page that fails is logged and
    skipped, so the returned collection may be a strict subset of the list.
    """

    def __init__(
        self,
        session: BrowserSession,
        options: RetrievalOptions,
        fetcher: PageFetcher,
        detector: Optional[PaginationDetector] = None,
    ) -> None:
        self.session = session
        self.options = options
        self.fetcher = fetcher
        self.detector = detector or PaginationDetector(fetcher)
        self.failed_pages: List[PageFailure] = []

    def resolve_page_count(self) -> int:
        if self.options.pages:
            return self.options.pages
        return self.detector.detect_total_pages()

    def retrieve_all_pages(self) -> RecordCollection:
        if not self.session.is_active:
            raise NotInitializedError()

        self.failed_pages = []
        total_pages = self.resolve_page_count()
        log_line(f"[AGGREGATE] Retrieving {total_pages} pages...")

        all_records: RecordCollection = {}
        for page_number in range(1, total_pages + 1):
            try:
                page_records = self.fetcher.fetch_page(page_number)
            except NotInitializedError:
                raise
            except Exception as exc:  # noqa: BLE001
                self._record_failure(page_number, exc)
                continue
            merge_records(all_records, page_records)

        _retrieval_event(
            "aggregate",
            step="complete",
            total_pages=total_pages,
            failed_pages=[failure.page for failure in self.failed_pages],
            records=len(all_records),
        )
        return all_records

    def _record_failure(self, page_number: int, exc: BaseException) -> None:
        failure = PageFailure(
            page=page_number,
            error_code=error_code_for(exc),
            message=short_error_message(exc),
        )
        self.failed_pages.append(failure)
        log_line(f"[AGGREGATE][WARN] Failed to retrieve page {page_number}: {failure.message}")
        _retrieval_event(
            "error",
            phase="aggregate",
            page=page_number,
            error_code=failure.error_code,
            error=failure.message,
        )


__all__ = ["Aggregator", "PageFailure"]
