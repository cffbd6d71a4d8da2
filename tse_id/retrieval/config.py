"""Configuration constants for the TSE list retriever."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional


def _parse_int(env_var: str, default: int, *, minimum: int | None = None) -> int:
    """Parse an integer from the environment, falling back on bad values."""

    try:
        value = int(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    if minimum is not None:
        return max(minimum, value)
    return value


# Page N of the list is reached by appending the literal N to this URL.
DEFAULT_URL: str = os.getenv(
    "TSE_URL",
    "https://www.bsi.bund.de/EN/Themen/Unternehmen-und-Organisationen/"
    "Standards-und-Zertifizierung/Zertifizierung-und-Anerkennung/Listen/"
    "Zertifizierte-Produkte-nach-TR/Technische_Sicherheitseinrichtungen/"
    "TSE_node.html?gts=913608_list%253Dtitle_text_sort%252Bdesc&gtp=913608_list%253D",
)

# Playwright timeouts are expressed in milliseconds.
DEFAULT_TIMEOUT_MS: int = _parse_int("TSE_TIMEOUT_MS", 30_000)

MAX_ATTEMPTS: int = _parse_int("TSE_MAX_ATTEMPTS", 3, minimum=1)
RETRY_BASE_DELAY_MS: int = _parse_int("TSE_RETRY_BASE_DELAY_MS", 2_000, minimum=0)

CHROMIUM_EXECUTABLE_ENV: str = "PLAYWRIGHT_CHROMIUM_EXECUTABLE_PATH"

# Required when Chromium runs inside containers without user namespaces.
CHROMIUM_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
    "--no-zygote",
)

_log_file = os.getenv("TSE_LOG_FILE", "").strip()
LOG_FILE: Optional[Path] = Path(_log_file) if _log_file else None


def chromium_executable_path() -> Optional[str]:
    """Return the browser executable override from the environment, if any."""

    value = os.getenv(CHROMIUM_EXECUTABLE_ENV)
    return value or None


@dataclass(frozen=True)
class RetrievalOptions:
    """Per-retrieval settings passed by value into the pipeline."""

    url: str = DEFAULT_URL
    timeout: int = DEFAULT_TIMEOUT_MS
    pages: Optional[int] = None

    def page_url(self, page_number: int) -> str:
        return f"{self.url}{page_number}"


def build_options(overrides: Mapping[str, Any] | None = None) -> RetrievalOptions:
    """Merge a partial override mapping onto the defaults.

    ``None`` values are treated as "not provided" so CLI namespaces can be
    passed through without filtering.
    """

    options = RetrievalOptions(url=DEFAULT_URL, timeout=DEFAULT_TIMEOUT_MS)
    if not overrides:
        return options

    known = {f.name for f in fields(RetrievalOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown retrieval option(s): {', '.join(unknown)}")

    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(options, **changes)
