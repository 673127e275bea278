"""Single forward-geocoding query against the geocode.maps.co search API.

The provider is free for 1M requests/month at 1 request/second. Pacing is the
caller's job; this module sends exactly one request per ``search`` call.
"""

from __future__ import annotations

import json
import logging
import math
import time

from geocode_batch.common.constants import SEARCH_ENDPOINT
from geocode_batch.common.errors import DecodeError, EmptyResponseError
from geocode_batch.common.http import HttpClient
from geocode_batch.common.logging import log_event
from geocode_batch.common.models import GeoMatch

logger = logging.getLogger("geocode_batch.provider")


def build_search_url(endpoint: str, query: str, api_key: str) -> str:
    # Parameters are embedded verbatim; requests requotes the URL on send.
    return f"{endpoint}?q={query}&api_key={api_key}"


def _reject_constant(name: str) -> float:
    raise ValueError(f"invalid number `{name}`")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range `{text}`")
    return value


def decode_matches(body: str, query: str) -> list[GeoMatch]:
    if len(body) == 0:
        raise EmptyResponseError(f"Empty response for address {query}")

    try:
        payload = json.loads(body, parse_float=_finite_float, parse_constant=_reject_constant)
        if not isinstance(payload, list):
            raise ValueError(f"invalid type: {type(payload).__name__}, expected a sequence")
        return [GeoMatch.from_payload(item) for item in payload]
    except (ValueError, OverflowError, RecursionError) as exc:
        raise DecodeError(f"Error decoding JSON for {query}: {exc}\n...from response: {body}") from exc


class GeocodeProvider:
    def __init__(
        self,
        api_key: str,
        http_client: HttpClient,
        *,
        endpoint: str = SEARCH_ENDPOINT,
        run_id: str | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.api_key = api_key
        self.http_client = http_client
        self.endpoint = endpoint
        self.run_id = run_id
        self.log = log or logger

    def search(self, query: str) -> list[GeoMatch]:
        """Return every match the provider lists for *query*.

        Raises a ``QueryError`` subclass on transport, body, empty-body or
        decoding failures. An empty list is a valid answer, not an error.
        """
        started = time.monotonic()
        body = self.http_client.get_text(build_search_url(self.endpoint, query, self.api_key))
        log_event(
            self.log,
            f"provider answered for {query}",
            level=logging.DEBUG,
            run_id=self.run_id,
            event="QUERY_DONE",
            query=query,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return decode_matches(body, query)

    __call__ = search
