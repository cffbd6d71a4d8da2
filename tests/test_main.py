from __future__ import annotations

import json
from pathlib import Path

import pytest

from tse_id import main as cli
from tse_id.retrieval.errors import RetrievalExhaustedError
from tse_id.retrieval.healthcheck import HealthResult
from tse_id.retrieval.records import Record

RECORD = Record(
    id="0781",
    year="2025",
    content="Swissbit TSE / USB",
    manufacturer="Bundesdruckerei GmbH – D-Trust",
    date_issuance="03.02.2025",
)


@pytest.fixture
def fake_retrieve(monkeypatch: pytest.MonkeyPatch) -> dict:
    captured: dict = {}

    def _retrieve(overrides=None, *, max_attempts=None):
        captured["overrides"] = overrides
        captured["max_attempts"] = max_attempts
        return {RECORD.key: RECORD}

    monkeypatch.setattr(cli, "retrieve", _retrieve)
    return captured


def test_dumps_escaped_compact() -> None:
    text = cli.dumps_escaped({"a/b": "Ü€\x7f"})

    assert text == '{"a\\/b":"\\u00dc\\u20ac\\u007f"}'
    assert json.loads(text) == {"a/b": "Ü€\x7f"}


def test_dumps_escaped_pretty() -> None:
    text = cli.dumps_escaped({"k": {"id": "1"}}, pretty=True)

    assert text == '{\n    "k": {\n        "id": "1"\n    }\n}'


def test_main_prints_json_to_stdout(
    fake_retrieve: dict, capsys: pytest.CaptureFixture
) -> None:
    exit_code = cli.main([])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "TSE \\/ USB" in out
    assert "\\u2013" in out
    assert json.loads(out) == {"0781-2025": RECORD.to_dict()}
    assert fake_retrieve["overrides"] == {"url": None, "timeout": None, "pages": None}


def test_main_passes_options(fake_retrieve: dict) -> None:
    exit_code = cli.main(
        ["--url", "https://example.com/?p=", "--timeout", "5000", "--pages", "2", "--max-attempts", "5"]
    )

    assert exit_code == 0
    assert fake_retrieve["overrides"] == {
        "url": "https://example.com/?p=",
        "timeout": 5000,
        "pages": 2,
    }
    assert fake_retrieve["max_attempts"] == 5


def test_main_writes_relative_output_file(
    fake_retrieve: dict,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
) -> None:
    monkeypatch.chdir(tmp_path)

    exit_code = cli.main(["-o", "data.json", "--pretty"])

    assert exit_code == 0
    written = (tmp_path / "data.json").read_text(encoding="utf-8")
    assert written.startswith('{\n    "0781-2025": {')
    assert json.loads(written)["0781-2025"]["id"] == "0781"
    assert capsys.readouterr().out == ""


def test_main_returns_one_on_failure(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    def _fail(overrides=None, *, max_attempts=None):
        raise RetrievalExhaustedError(3, RuntimeError("browser gone"))

    monkeypatch.setattr(cli, "retrieve", _fail)

    assert cli.main([]) == 1
    assert capsys.readouterr().out == ""


def test_main_check_reports_health(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "run_health_checks",
        lambda launch=False: HealthResult(ok=False, checks={"launch": {"ok": False}}),
    )

    assert cli.main(["--check"]) == 1


def test_main_rejects_unknown_flags(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--bogus"])

    assert excinfo.value.code == 2
    assert "--bogus" in capsys.readouterr().err
