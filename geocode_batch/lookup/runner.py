"""Address loop: resolve, emit and pace one input line at a time."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterable

from geocode_batch.common.logging import log_event
from geocode_batch.lookup.emit import CsvRecordWriter, emit_resolution
from geocode_batch.lookup.resolver import QueryFn, resolve_address


@dataclass
class RunStats:
    addresses: int = 0
    resolved: int = 0
    empty: int = 0
    failed: int = 0
    rows_written: int = 0
    queries: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def strip_line_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def run_addresses(
    lines: Iterable[str],
    query: QueryFn,
    writer: CsvRecordWriter,
    *,
    delay_seconds: float,
    logger: logging.Logger,
    pause: Callable[[float], None] = time.sleep,
    run_id: str | None = None,
) -> RunStats:
    stats = RunStats()

    for line in lines:
        address = strip_line_terminator(line)
        resolution = resolve_address(
            address,
            query,
            delay_seconds=delay_seconds,
            pause=pause,
            log=logger,
            run_id=run_id,
        )
        rows = emit_resolution(resolution, writer, logger, run_id=run_id)

        stats.addresses += 1
        stats.queries += resolution.attempts
        stats.rows_written += rows
        if resolution.error is not None:
            stats.failed += 1
        elif rows == 0:
            stats.empty += 1
        else:
            stats.resolved += 1

        log_event(
            logger,
            f"{rows} row(s) written for {address}",
            level=logging.DEBUG,
            run_id=run_id,
            event="ADDRESS_DONE",
            status="ok" if rows else "skipped",
            attempt=resolution.attempts,
            address=address,
            query=resolution.query,
            rows_out=rows,
        )
        pause(delay_seconds)

    return stats
