"""HTTP client with timeouts and opt-in retries for transient statuses."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from geocode_batch.common.constants import USER_AGENT
from geocode_batch.common.errors import BodyReadError, HttpStatusError, TransportError

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 60.0


@dataclass(frozen=True)
class RetryConfig:
    # One attempt means the provider query is never retried at this layer.
    max_attempts: int = 1
    multiplier: float = 1.0
    max_wait: float = 30.0


class RetryableHttpError(HttpStatusError):
    pass


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.user_agent = user_agent
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    def _raise_for_retryable_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableHttpError(f"Retryable HTTP status: {status}")

    def _read_body(self, response: requests.Response) -> str:
        try:
            content = response.content
        except requests.RequestException as exc:
            raise BodyReadError(f"Error in query: {exc}") from exc
        try:
            return content.decode(response.encoding or "utf-8", errors="replace")
        except LookupError as exc:
            raise BodyReadError(f"Error in query: unknown response encoding {response.encoding!r}") from exc

    def _get_text(self, url: str) -> str:
        try:
            response = self.session.request(
                method="GET",
                url=url,
                headers=self._headers(),
                timeout=(self.timeout.connect, self.timeout.read),
                stream=True,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Error in lat/lon query: {exc!r}") from exc

        try:
            self._raise_for_retryable_status(response)
            return self._read_body(response)
        finally:
            response.close()

    def get_text(self, url: str) -> str:
        """GET *url* and return the decoded body, whatever the status code.

        Only transient statuses are treated as failures, and only those are
        retried when ``RetryConfig.max_attempts`` allows it.
        """

        @retry(
            stop=stop_after_attempt(self.retry.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=1.0,
            ),
            retry=retry_if_exception_type(RetryableHttpError),
            reraise=True,
        )
        def _wrapped() -> str:
            return self._get_text(url)

        return _wrapped()
