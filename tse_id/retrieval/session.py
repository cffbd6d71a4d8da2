"""Ownership of the single headless Chromium used by a retrieval attempt."""
from __future__ import annotations

from typing import Any, Dict, Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from . import config
from .errors import LaunchError, NotInitializedError
from .logging_utils import _retrieval_event
from .utils import log_line, short_error_message


class BrowserSession:
    """Start/stop lifecycle around one Playwright browser handle."""

    def __init__(self) -> None:
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_active(self) -> bool:
        return self._browser is not None

    @property
    def browser(self) -> Browser:
        if self._browser is None:
            raise NotInitializedError()
        return self._browser

    def _launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "headless": True,
            "args": list(config.CHROMIUM_LAUNCH_ARGS),
        }
        executable = config.chromium_executable_path()
        if executable:
            options["executable_path"] = executable
        return options

    def initialize(self) -> None:
        """Launch headless Chromium; raises :class:`LaunchError` on failure."""

        launch_options = self._launch_options()
        _retrieval_event(
            "browser",
            step="launch",
            executable_path=launch_options.get("executable_path"),
        )
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(**launch_options)
        except Exception as exc:  # noqa: BLE001
            log_line(f"[BROWSER][ERROR] Chromium failed to launch: {short_error_message(exc)}")
            self._stop_driver()
            self._browser = None
            raise LaunchError(f"Browser failed to launch: {short_error_message(exc)}") from exc

    def new_page(self) -> Page:
        return self.browser.new_page()

    def close(self) -> None:
        """Close the browser if active. Never raises; the handle is always cleared."""

        browser, self._browser = self._browser, None
        if browser is not None:
            try:
                browser.close()
                _retrieval_event("browser", step="closed")
            except Exception as exc:  # noqa: BLE001
                log_line(f"[BROWSER][WARN] Error while closing browser: {short_error_message(exc)}")
        self._stop_driver()

    def _stop_driver(self) -> None:
        driver, self._playwright = self._playwright, None
        if driver is None:
            return
        try:
            driver.stop()
        except Exception as exc:  # noqa: BLE001
            log_line(f"[BROWSER][WARN] Error while stopping Playwright: {short_error_message(exc)}")


__all__ = ["BrowserSession"]
