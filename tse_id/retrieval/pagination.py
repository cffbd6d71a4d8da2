"""Best-effort estimate of how many pages the TSE list spans.

The BSI list does not publish a page count, so several heuristics are tried
in a fixed order and the largest page number any of them yields wins. The
result can overcount (weak "more results" hints default to three pages) or
undercount; the aggregator tolerates pages that fail to load.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional

from .document import PageDocument
from .fetcher import PageFetcher
from .logging_utils import _retrieval_event
from .utils import log_line

HREF_PAGE_PATTERNS = (
    re.compile(r"[?&]p=(\d+)"),
    re.compile(r"[?&]page=(\d+)"),
    re.compile(r"[?&](\d+)$"),
    re.compile(r"gtp=913608_list%253D(\d+)"),
    re.compile(r"page(\d+)"),
    re.compile(r"p(\d+)"),
)

NEXT_TEXT_MARKERS = ("next", "weiter", ">", "→")
NEXT_HREF_MARKERS = ("next", "weiter")

PAGE_COUNT_TEXT_PATTERNS = (
    re.compile(r"(?:Page|Seite)\s+\d+\s+(?:of|von)\s+(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s+(?:pages|seiten)", re.IGNORECASE),
    re.compile(r"showing\s+\d+.*?of\s+(\d+)", re.IGNORECASE),
    re.compile(r"anzeige\s+\d+.*?von\s+(\d+)", re.IGNORECASE),
)

NUMBERED_LINK_HREF_MARKERS = ("p=", "page")
MORE_RESULTS_TEXT_MARKERS = ("weiter", "next", "mehr")
SECOND_PAGE_HREF_MARKERS = ("p=2", "page=2")

# Used when the page hints at more results without saying how many.
FALLBACK_PAGE_ESTIMATE = 3

_LEADING_INT = re.compile(r"[+-]?\d+")


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text.strip())
    return int(match.group(0)) if match else None


def _max_from_hrefs(hrefs: Iterable[str]) -> int:
    max_page = 1
    for href in hrefs:
        if not href:
            continue
        for pattern in HREF_PAGE_PATTERNS:
            match = pattern.search(href)
            if match:
                max_page = max(max_page, int(match.group(1)))
    return max_page


def estimate_total_pages(document: PageDocument) -> int:
    """Return the estimated page count (at least 1) for a loaded first page."""

    links = document.links()
    body_text = document.text()

    # Numeric page parameters in link targets.
    max_page = _max_from_hrefs(link.href for link in links)

    # Next/forward links.
    if max_page == 1:
        for link in links:
            text = link.text.lower()
            href = link.href.lower()
            if any(marker in text for marker in NEXT_TEXT_MARKERS) or any(
                marker in href for marker in NEXT_HREF_MARKERS
            ):
                max_page = max(max_page, 2)

    # Explicit "Page X of Y" style counters.
    for pattern in PAGE_COUNT_TEXT_PATTERNS:
        match = pattern.search(body_text)
        if match:
            max_page = max(max_page, int(match.group(1)))

    # Numbered pagination links.
    for link in links:
        if not any(marker in link.href for marker in NUMBERED_LINK_HREF_MARKERS):
            continue
        number = _leading_int(link.text)
        if number is not None and number > max_page:
            max_page = number

    # Weak hints that more results exist.
    if max_page == 1:
        lowered = body_text.lower()
        has_more = any(marker in lowered for marker in MORE_RESULTS_TEXT_MARKERS) or any(
            marker in link.href for link in links for marker in SECOND_PAGE_HREF_MARKERS
        )
        if has_more:
            max_page = FALLBACK_PAGE_ESTIMATE

    return max_page


class PaginationDetector:
    def __init__(self, fetcher: PageFetcher) -> None:
        self.fetcher = fetcher

    def detect_total_pages(self) -> int:
        log_line(f"[PAGES] Detecting total pages from: {self.fetcher.options.page_url(1)}")
        document = self.fetcher.load_document(1)
        total = estimate_total_pages(document)
        _retrieval_event("pages", step="detected", total_pages=total)
        log_line(f"[PAGES] Detected {total} total pages")
        return total


__all__ = ["PaginationDetector", "estimate_total_pages", "FALLBACK_PAGE_ESTIMATE"]
