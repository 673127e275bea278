"""CSV emission of resolved matches."""

from __future__ import annotations

import csv
import logging
from typing import TextIO

from geocode_batch.common.constants import OUTPUT_FIELDS
from geocode_batch.common.logging import log_event
from geocode_batch.common.models import OutputRecord
from geocode_batch.lookup.resolver import Resolution


class CsvRecordWriter:
    """Writes the header once, then one flushed row per record."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.writer = csv.DictWriter(stream, fieldnames=list(OUTPUT_FIELDS), lineterminator="\n")
        self.writer.writeheader()
        self.stream.flush()

    def write(self, record: OutputRecord) -> None:
        self.writer.writerow(record.to_row())
        self.stream.flush()


def emit_resolution(
    resolution: Resolution,
    writer: CsvRecordWriter,
    logger: logging.Logger,
    *,
    run_id: str | None = None,
) -> int:
    if resolution.error is not None:
        log_event(
            logger,
            str(resolution.error),
            level=logging.ERROR,
            run_id=run_id,
            event="ADDRESS_FAILED",
            status="error",
            attempt=resolution.attempts,
            address=resolution.original,
            query=resolution.query,
            error_code=resolution.error.error_code,
        )
        return 0

    if not resolution.matches:
        log_event(
            logger,
            f"Got 0 results for {resolution.query}",
            level=logging.WARNING,
            run_id=run_id,
            event="NO_RESULTS",
            status="empty",
            attempt=resolution.attempts,
            address=resolution.original,
            query=resolution.query,
        )
        return 0

    for match in resolution.matches:
        writer.write(OutputRecord.from_match(resolution.original, match))
    return len(resolution.matches)
