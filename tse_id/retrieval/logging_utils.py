from __future__ import annotations

from typing import Any

from .utils import log_line


def _retrieval_event(label: str = "", *, phase: str | None = None, **fields: Any) -> None:
    """Log ``[RETRIEVE][LABEL] k=v, ...``; ``phase`` alone stands in for the label."""

    try:
        phase_label = label or (phase or "")
        if phase and label:
            fields.setdefault("phase", phase)
        payload = ", ".join(f"{k}={repr(v)}" for k, v in sorted(fields.items()))
        log_line(f"[RETRIEVE][{phase_label.upper()}] {payload}")
    except Exception:
        # Never let logging break a retrieval.
        return


__all__ = ["_retrieval_event"]
