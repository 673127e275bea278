"""Retry-by-truncation: drop leading words of an address until it resolves.

Partial or garbled addresses (a typo in the house name, a stray prefix)
often resolve once the leading tokens are gone, so an address that errors
or returns nothing is re-queried with its first word removed. The loop stops
before querying an empty or single-word candidate.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from geocode_batch.common.errors import QueryError
from geocode_batch.common.logging import log_event
from geocode_batch.common.models import GeoMatch

QueryFn = Callable[[str], Sequence[GeoMatch]]

_LEADING_TOKEN = re.compile(r"^\S*\s*")
_WHITESPACE = re.compile(r"\s")

logger = logging.getLogger("geocode_batch.resolver")


@dataclass(frozen=True)
class Resolution:
    original: str
    query: str
    matches: tuple[GeoMatch, ...]
    error: QueryError | None
    attempts: int

    @property
    def resolved(self) -> bool:
        return self.error is None and len(self.matches) > 0


def drop_leading_token(address: str) -> str:
    return _LEADING_TOKEN.sub("", address, count=1)


def is_exhausted(candidate: str) -> bool:
    return not candidate or _WHITESPACE.search(candidate) is None


def truncation_candidates(address: str) -> Iterator[str]:
    """Yield the shortened addresses the resolver would retry, in order."""
    current = drop_leading_token(address)
    while not is_exhausted(current):
        yield current
        current = drop_leading_token(current)


def _attempt(query: QueryFn, candidate: str) -> tuple[tuple[GeoMatch, ...], QueryError | None]:
    try:
        return tuple(query(candidate)), None
    except QueryError as exc:
        return (), exc


def resolve_address(
    address: str,
    query: QueryFn,
    *,
    delay_seconds: float,
    pause: Callable[[float], None] = time.sleep,
    log: logging.Logger | None = None,
    run_id: str | None = None,
) -> Resolution:
    log = log or logger
    current = address
    attempts = 1
    matches, error = _attempt(query, current)

    for candidate in truncation_candidates(address):
        if error is None and matches:
            break
        if error is not None:
            log_event(
                log,
                f"Got error: {error}",
                level=logging.WARNING,
                run_id=run_id,
                event="QUERY_FAIL",
                status="error",
                attempt=attempts,
                address=address,
                query=current,
                error_code=error.error_code,
            )
        log_event(
            log,
            f"Trimming and retrying new address: {candidate}",
            run_id=run_id,
            event="TRIM_RETRY",
            status="retry",
            attempt=attempts + 1,
            address=address,
            query=candidate,
        )
        pause(delay_seconds)
        current = candidate
        attempts += 1
        matches, error = _attempt(query, current)

    return Resolution(original=address, query=current, matches=matches, error=error, attempts=attempts)
