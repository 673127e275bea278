"""Geocode newline-delimited addresses from stdin into CSV rows on stdout."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, TextIO

from geocode_batch.common.config_loader import load_settings
from geocode_batch.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS
from geocode_batch.common.errors import ConfigError
from geocode_batch.common.fs import read_api_key
from geocode_batch.common.http import HttpClient
from geocode_batch.common.ids import generate_run_id
from geocode_batch.common.logging import build_logger, close_logger, log_event
from geocode_batch.common.time_utils import utc_timestamp_iso
from geocode_batch.lookup.emit import CsvRecordWriter
from geocode_batch.lookup.provider import GeocodeProvider
from geocode_batch.lookup.reports import write_run_summary
from geocode_batch.lookup.runner import run_addresses


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-a",
        "--api-key-file",
        required=True,
        help="Name of file holding the geocode.maps.co api key",
    )
    parser.add_argument("--config", default=None, help="YAML settings merged over the defaults")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--log-format", default="text", choices=["text", "json"])
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--summary-json", default=None)
    return parser.parse_args(argv)


def run_command(
    args: argparse.Namespace,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    pause: Callable[[float], None] = time.sleep,
) -> int:
    run_id = args.run_id or generate_run_id()
    started_at = utc_timestamp_iso()
    logger = build_logger(
        run_id,
        level=args.log_level,
        log_format=args.log_format,
        log_path=Path(args.log_file) if args.log_file else None,
    )
    try:
        try:
            settings = load_settings(Path(args.config) if args.config else None)
            api_key = read_api_key(Path(args.api_key_file))
        except ConfigError as exc:
            log_event(
                logger,
                str(exc),
                level=logging.ERROR,
                run_id=run_id,
                event="CONFIG_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL

        log_event(logger, "run start", level=logging.DEBUG, run_id=run_id, event="RUN_START", status="ok")
        writer = CsvRecordWriter(stdout if stdout is not None else sys.stdout)
        with HttpClient(timeout=settings.timeout, retry=settings.retry, user_agent=settings.user_agent) as client:
            provider = GeocodeProvider(api_key, client, endpoint=settings.endpoint, run_id=run_id, log=logger)
            stats = run_addresses(
                stdin if stdin is not None else sys.stdin,
                provider.search,
                writer,
                delay_seconds=settings.delay_seconds,
                logger=logger,
                pause=pause,
                run_id=run_id,
            )

        log_event(
            logger,
            f"geocoded {stats.resolved}/{stats.addresses} addresses, {stats.rows_written} row(s) written",
            level=logging.DEBUG,
            run_id=run_id,
            event="RUN_END",
            status="ok",
            rows_out=stats.rows_written,
        )
        if args.summary_json:
            write_run_summary(Path(args.summary_json), run_id=run_id, stats=stats, started_at=started_at)
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8")
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
