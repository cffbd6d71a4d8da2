from __future__ import annotations

import pytest

from tse_id.retrieval.records import (
    Record,
    merge_records,
    normalize_whitespace,
    parse_identifier,
    parse_row,
    records_to_dict,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("BSI-K-TR-0781-2025", ("0781", "2025")),
        ("  BSI-K-TR-0001-2019 ", ("0001", "2019")),
        ("BSI-K-TR-12345-2024-MA01", ("12345", "2024")),
        ("", None),
        (None, None),
        ("BSI-DSZ-CC-1234-2020", None),
    ],
)
def test_parse_identifier(raw: str | None, expected: tuple[str, str] | None) -> None:
    assert parse_identifier(raw) == expected


def test_parse_row_keeps_leading_zeros() -> None:
    record = parse_row(["BSI-K-TR-0042-2020", "desc", "maker", "01.01.2020"])

    assert record is not None
    assert record.id == "0042"
    assert record.year == "2020"
    assert record.key == "0042-2020"


def test_parse_row_normalises_cells() -> None:
    record = parse_row(
        ["BSI-K-TR-0781-2025", "\n  cryptovision\t TSE \n", "  Vendor  ", " 03.02.2025\n", "extra"]
    )

    assert record == Record(
        id="0781",
        year="2025",
        content="cryptovision TSE",
        manufacturer="Vendor",
        date_issuance="03.02.2025",
    )


def test_parse_row_too_short() -> None:
    assert parse_row(["BSI-K-TR-0781-2025", "a", "b"]) is None


def test_record_fields_default_to_empty_strings() -> None:
    record = Record(id="1", year="2020")

    assert record.to_dict() == {
        "id": "1",
        "year": "2020",
        "content": "",
        "manufacturer": "",
        "date_issuance": "",
    }


def test_normalize_whitespace() -> None:
    assert normalize_whitespace("  a \n\t b  ") == "a b"
    assert normalize_whitespace(None) == ""


def test_merge_records_later_wins() -> None:
    first = Record(id="1", year="2020", content="old")
    second = Record(id="1", year="2020", content="new")
    other = Record(id="2", year="2021")

    merged = merge_records({first.key: first, other.key: other}, {second.key: second})

    assert len(merged) == 2
    assert merged["1-2020"].content == "new"


def test_records_to_dict_shape() -> None:
    record = Record(id="0781", year="2025", content="c", manufacturer="m", date_issuance="d")

    assert records_to_dict({record.key: record}) == {
        "0781-2025": {
            "id": "0781",
            "year": "2025",
            "content": "c",
            "manufacturer": "m",
            "date_issuance": "d",
        }
    }
