from __future__ import annotations

import importlib.util
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import config
from .config import build_options
from .config_validation import validate_options
from .logging_utils import _retrieval_event
from .session import BrowserSession
from .utils import log_line


@dataclass
class HealthResult:
    ok: bool
    checks: dict[str, dict[str, Any]]


def run_health_checks(*, launch: bool = False) -> HealthResult:
    """Report whether the environment can run a retrieval.

    With ``launch=True`` a real browser is started and stopped.
    """

    checks: dict[str, dict[str, Any]] = {}

    try:
        validate_options(build_options(), "health")
        checks["config"] = {"ok": True, "timeout_ms": config.DEFAULT_TIMEOUT_MS}
    except ValueError as exc:
        checks["config"] = {"ok": False, "error": str(exc)}

    executable = config.chromium_executable_path()
    if executable:
        checks["executable"] = {
            "ok": Path(executable).exists(),
            "env": config.CHROMIUM_EXECUTABLE_ENV,
            "path": executable,
        }
    else:
        checks["executable"] = {"ok": True, "path": None, "bundled": True}

    checks["playwright"] = {"ok": importlib.util.find_spec("playwright") is not None}

    if launch:
        session = BrowserSession()
        try:
            session.initialize()
            checks["launch"] = {"ok": True}
        except Exception as exc:  # noqa: BLE001
            checks["launch"] = {"ok": False, "error": str(exc)}
        finally:
            session.close()

    overall_ok = all(check.get("ok", False) for check in checks.values())

    _retrieval_event(
        "state" if overall_ok else "error",
        phase="health",
        ok=overall_ok,
        checks=checks,
    )

    return HealthResult(ok=overall_ok, checks=checks)


if __name__ == "__main__":  # pragma: no cover
    result = run_health_checks(launch=True)
    for name, info in result.checks.items():
        status = "OK" if info.get("ok") else "FAIL"
        log_line(f"[HEALTH] {name}: {status} {info}")
    raise SystemExit(0 if result.ok else 1)
