"""Navigate to one page of the TSE list and extract its records."""
from __future__ import annotations

from playwright.sync_api import Error as PWError, Page, TimeoutError as PWTimeout

from .config import RetrievalOptions
from .document import PageDocument
from .errors import ExtractionError, NavigationError, PageTimeoutError
from .logging_utils import _retrieval_event
from .records import RecordCollection, parse_row
from .selectors import TSE_LIST_SELECTORS, TseListSelectors
from .session import BrowserSession
from .utils import log_line, short_error_message


def extract_records(
    document: PageDocument, selectors: TseListSelectors = TSE_LIST_SELECTORS
) -> RecordCollection:
    """Return the records found in the data table of ``document``."""

    records: RecordCollection = {}
    for cells in document.row_cells(selectors.row_selector, selectors.cell_selector):
        record = parse_row(cells, selectors)
        if record is None:
            continue
        records[record.key] = record
    return records


class PageFetcher:
    def __init__(
        self,
        session: BrowserSession,
        options: RetrievalOptions,
        selectors: TseListSelectors = TSE_LIST_SELECTORS,
    ) -> None:
        self.session = session
        self.options = options
        self.selectors = selectors

    def load_document(self, page_number: int) -> PageDocument:
        """Open page ``page_number`` in a fresh tab and return its rendered DOM.

        The tab is closed on every exit path.
        """

        browser = self.session.browser
        url = self.options.page_url(page_number)
        page = browser.new_page()
        try:
            self._goto(page, url, page_number)
            self._wait_for_rows(page, page_number)
            try:
                html = page.content()
            except PWError as exc:
                raise ExtractionError(
                    f"Unable to read document for page {page_number}: {short_error_message(exc)}"
                ) from exc
            return PageDocument.from_html(html)
        finally:
            try:
                page.close()
            except Exception as exc:  # noqa: BLE001
                log_line(f"[FETCH][WARN] Failed to close tab for page {page_number}: {short_error_message(exc)}")

    def fetch_page(self, page_number: int) -> RecordCollection:
        """Return the records listed on page ``page_number``."""

        log_line(f"[FETCH] Retrieving page {page_number}: {self.options.page_url(page_number)}")
        document = self.load_document(page_number)
        records = extract_records(document, self.selectors)
        log_line(f"[FETCH] Found {len(records)} entries on page {page_number}")
        return records

    def _goto(self, page: Page, url: str, page_number: int) -> None:
        _retrieval_event("nav", step="goto", page=page_number, url=url)
        try:
            page.goto(url, wait_until="domcontentloaded", timeout=self.options.timeout)
        except PWTimeout as exc:
            raise NavigationError(
                f"Navigation to page {page_number} timed out after {self.options.timeout}ms: "
                f"{short_error_message(exc)}"
            ) from exc
        except PWError as exc:
            raise NavigationError(
                f"Navigation to page {page_number} failed: {short_error_message(exc)}"
            ) from exc

    def _wait_for_rows(self, page: Page, page_number: int) -> None:
        try:
            page.wait_for_selector(self.selectors.row_selector, timeout=self.options.timeout)
        except PWTimeout as exc:
            raise PageTimeoutError(
                f"No table rows on page {page_number} within {self.options.timeout}ms"
            ) from exc
        except PWError as exc:
            raise NavigationError(
                f"Waiting for table rows on page {page_number} failed: {short_error_message(exc)}"
            ) from exc


__all__ = ["PageFetcher", "extract_records"]
