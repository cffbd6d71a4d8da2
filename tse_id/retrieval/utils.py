from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from . import config

LOGGER = logging.getLogger("tse_id")
_LOGGER_INITIALISED = False


def configure_logger(log_path: Optional[Path] = None) -> None:
    """Configure the shared logger; stderr always, plus ``log_path`` if given.

    Stdout is reserved for the JSON payload written by the command line.
    """

    global _LOGGER_INITIALISED

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        try:
            handler.close()
        except Exception:  # noqa: BLE001
            continue

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    LOGGER.addHandler(stream_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        LOGGER.addHandler(file_handler)

    LOGGER.setLevel(logging.INFO)
    LOGGER.propagate = False

    _LOGGER_INITIALISED = True


def _ensure_logger() -> None:
    """Initialise the logger lazily using the configured log file."""

    if _LOGGER_INITIALISED:
        return
    configure_logger(config.LOG_FILE)


def log_line(message: str) -> None:
    """Write a timestamped log line to stderr and the active log file."""

    _ensure_logger()
    LOGGER.info(message)


def short_error_message(exc: BaseException, max_length: int = 200) -> str:
    message = str(exc).strip() or type(exc).__name__
    # Playwright messages carry a multi-line call log after the first line.
    message = message.splitlines()[0]
    if len(message) > max_length:
        return message[: max_length - 3] + "..."
    return message
