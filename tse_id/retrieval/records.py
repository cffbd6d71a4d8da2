"""Record model for certified TSE entries."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from .selectors import TSE_LIST_SELECTORS, TseListSelectors

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Record:
    """One certified device entry from the TSE list."""

    id: str
    year: str
    content: str = ""
    manufacturer: str = ""
    date_issuance: str = ""

    @property
    def key(self) -> str:
        return f"{self.id}-{self.year}"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


RecordCollection = Dict[str, Record]


def normalize_whitespace(value: str | None) -> str:
    """Collapse every whitespace run to a single space and trim."""

    return _WHITESPACE.sub(" ", value or "").strip()


def parse_identifier(
    raw: str | None, selectors: TseListSelectors = TSE_LIST_SELECTORS
) -> Optional[tuple[str, str]]:
    """Return ``(id, year)`` from a composite certificate identifier.

    ``"BSI-K-TR-0781-2025"`` yields ``("0781", "2025")``; digits are kept as
    strings so leading zeros survive.
    """

    text = (raw or "").strip()
    if not text:
        return None
    match = selectors.identifier_pattern.search(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_row(
    cells: Sequence[str], selectors: TseListSelectors = TSE_LIST_SELECTORS
) -> Optional[Record]:
    """Build a :class:`Record` from the text of one table row's cells.

    Rows that are too short or whose identifier cell does not parse are
    skipped by returning ``None``.
    """

    if len(cells) < selectors.min_cells:
        return None

    parsed = parse_identifier(cells[0], selectors)
    if parsed is None:
        return None

    record_id, year = parsed
    return Record(
        id=record_id,
        year=year,
        content=normalize_whitespace(cells[1]),
        manufacturer=(cells[2] or "").strip(),
        date_issuance=(cells[3] or "").strip(),
    )


def merge_records(target: RecordCollection, incoming: RecordCollection) -> RecordCollection:
    """Merge ``incoming`` into ``target`` in place; later entries win."""

    target.update(incoming)
    return target


def records_to_dict(records: RecordCollection) -> Dict[str, Dict[str, str]]:
    """Return a JSON-ready mapping of key to record fields."""

    return {key: record.to_dict() for key, record in records.items()}


__all__ = [
    "Record",
    "RecordCollection",
    "normalize_whitespace",
    "parse_identifier",
    "parse_row",
    "merge_records",
    "records_to_dict",
]
