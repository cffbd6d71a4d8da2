from __future__ import annotations

"""Selectors and identifier hints for the BSI TSE list."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class TseListSelectors:
    """Structural hints for the certified-products table.

    Each data row carries the certificate identifier (``BSI-K-TR-0781-2025``),
    the product description, the manufacturer and the issuance date, in that
    cell order.
    """

    row_selector: str = "#content div.wrapperTable table.textualData tbody tr"
    cell_selector: str = "td"
    min_cells: int = 4
    identifier_pattern: re.Pattern[str] = re.compile(r"BSI-K-TR-(\d+)-(\d+)")


TSE_LIST_SELECTORS = TseListSelectors()

__all__ = [
    "TseListSelectors",
    "TSE_LIST_SELECTORS",
]
