"""Command line entry point: retrieve the TSE list and print it as JSON."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from tse_id.retrieval import config
from tse_id.retrieval.healthcheck import run_health_checks
from tse_id.retrieval.records import RecordCollection, records_to_dict
from tse_id.retrieval.retrieve import retrieve
from tse_id.retrieval.utils import configure_logger, log_line


def dumps_escaped(data: Mapping[str, Any], pretty: bool = False) -> str:
    """Serialise ``data`` with ``/`` escaped and every non-ASCII char as ``\\uXXXX``.

    This matches the format of the published reference dumps of the list.
    """

    if pretty:
        text = json.dumps(data, indent=4, ensure_ascii=True)
    else:
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=True)
    # ensure_ascii leaves DEL untouched.
    text = text.replace("\x7f", "\\u007f")
    return text.replace("/", "\\/")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tse-id",
        description="Retrieves a list of TSE from BSI",
    )
    parser.add_argument("-o", "--output", help="Output file path (default: stdout)")
    parser.add_argument(
        "-p",
        "--pretty",
        action="store_true",
        help="Pretty print JSON output",
    )
    parser.add_argument("--url", default=None, help="Base URL; the page number is appended.")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help=f"Navigation/wait timeout in ms (default: {config.DEFAULT_TIMEOUT_MS}).",
    )
    parser.add_argument(
        "--pages",
        type=int,
        default=None,
        help="Number of pages to retrieve (default: auto-detect).",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=config.MAX_ATTEMPTS,
        help="Whole-retrieval attempts before giving up.",
    )
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check configuration and browser availability, then exit.",
    )
    return parser


def _write_output(records: RecordCollection, output: str | None, pretty: bool) -> None:
    text = dumps_escaped(records_to_dict(records), pretty)
    if not output:
        print(text)
        return

    output_path = Path(output)
    if not output_path.is_absolute():
        output_path = Path.cwd() / output_path
    output_path.write_text(text, encoding="utf-8")
    log_line(f"Data saved to: {output_path}")
    log_line(f"Total entries: {len(records)}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.log_file is not None:
        configure_logger(args.log_file)

    if args.check:
        result = run_health_checks(launch=True)
        for name, info in result.checks.items():
            status = "OK" if info.get("ok") else "FAIL"
            log_line(f"[HEALTH] {name}: {status} {info}")
        return 0 if result.ok else 1

    overrides = {"url": args.url, "timeout": args.timeout, "pages": args.pages}
    try:
        log_line("Starting TSE data retrieval...")
        records = retrieve(overrides, max_attempts=args.max_attempts)
        _write_output(records, args.output, args.pretty)
    except Exception as exc:  # noqa: BLE001
        log_line(f"Error retrieving TSE data: {exc}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
