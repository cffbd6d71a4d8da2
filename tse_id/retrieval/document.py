"""Read-only view over a loaded HTML document.

The fetcher and the pagination detector only ever need rows, links and the
visible text of a page. Both work against :class:`PageDocument`, which is
built from the HTML a browser page has rendered (or from a fixture string in
tests), so neither needs a live browser to be exercised.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup

from .errors import ExtractionError


@dataclass(frozen=True)
class Link:
    href: str
    text: str


class PageDocument:
    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str | None) -> "PageDocument":
        if not html or not html.strip():
            raise ExtractionError("Document is empty; nothing to query")
        # html5lib builds the same tree a browser would, including implied <tbody>.
        soup = BeautifulSoup(html, "html5lib")
        if soup.find("html") is None:
            raise ExtractionError("Document has no root element")
        return cls(soup)

    def row_cells(self, row_selector: str, cell_selector: str = "td") -> List[List[str]]:
        """Return the raw text of every cell, per row matching ``row_selector``."""

        rows: List[List[str]] = []
        for row in self._soup.select(row_selector):
            rows.append([cell.get_text() for cell in row.select(cell_selector)])
        return rows

    def links(self) -> List[Link]:
        """Return every anchor; ``href`` is empty when the attribute is absent."""

        out: List[Link] = []
        for anchor in self._soup.find_all("a"):
            out.append(Link(href=str(anchor.get("href") or ""), text=anchor.get_text()))
        return out

    def text(self) -> str:
        """Return the concatenated text of the document body."""

        body = self._soup.body
        if body is None:
            return ""
        return body.get_text()


__all__ = ["Link", "PageDocument"]
