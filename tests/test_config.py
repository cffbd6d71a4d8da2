from __future__ import annotations

import pytest

from tse_id.retrieval import config
from tse_id.retrieval.config import RetrievalOptions, build_options


def test_build_options_defaults() -> None:
    options = build_options()

    assert options.url == config.DEFAULT_URL
    assert options.timeout == config.DEFAULT_TIMEOUT_MS
    assert options.pages is None


def test_build_options_applies_overrides_and_ignores_none() -> None:
    options = build_options({"url": "https://example.com/?p=", "timeout": None, "pages": 4})

    assert options.url == "https://example.com/?p="
    assert options.timeout == config.DEFAULT_TIMEOUT_MS
    assert options.pages == 4


def test_build_options_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="maxPages"):
        build_options({"maxPages": 3})


def test_page_url_appends_literal_number() -> None:
    options = RetrievalOptions(url="https://example.com/list?gtp=913608_list%253D")

    assert options.page_url(1) == "https://example.com/list?gtp=913608_list%253D1"
    assert options.page_url(10) == "https://example.com/list?gtp=913608_list%253D10"


def test_default_url_targets_bsi_list() -> None:
    assert config.DEFAULT_URL.startswith("https://www.bsi.bund.de/")
    assert config.DEFAULT_URL.endswith("gtp=913608_list%253D")


def test_parse_int_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TSE_TEST_INT", "not-a-number")
    assert config._parse_int("TSE_TEST_INT", 7) == 7

    monkeypatch.setenv("TSE_TEST_INT", "0")
    assert config._parse_int("TSE_TEST_INT", 7, minimum=1) == 1


def test_chromium_executable_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.CHROMIUM_EXECUTABLE_ENV, "")
    assert config.chromium_executable_path() is None

    monkeypatch.setenv(config.CHROMIUM_EXECUTABLE_ENV, "/opt/chromium/chrome")
    assert config.chromium_executable_path() == "/opt/chromium/chrome"
