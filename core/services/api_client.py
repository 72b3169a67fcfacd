import asyncio
from json import JSONDecodeError, loads
from typing import Any, Protocol

import httpx
from loguru import logger

from core.exceptions import WebfitError

DEFAULT_HEADERS = {"Accept": "application/json"}


class APIClientHTTPError(WebfitError):
    """Non-success response from the catalog."""

    def __init__(self, status: int, text: str, *, url: str, retryable: bool = False, reason: str | None = None):
        self.status = status
        self.text = text
        self.url = url
        self.retryable = retryable
        self.reason = reason
        super().__init__(f"Catalog responded {status} for {url}", code=status, details=reason or text)


class APIClientTransportError(WebfitError):
    """The catalog could not be reached or the exchange broke off."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message, code=503)


class APISettings(Protocol):
    EXERCISE_API_URL: str
    API_MAX_RETRIES: int
    API_RETRY_INITIAL_DELAY: float
    API_RETRY_BACKOFF_FACTOR: float
    API_RETRY_MAX_DELAY: float
    API_TIMEOUT: float | None


def is_retryable_status(status: int) -> bool:
    return status == 429 or status >= 500


class APIClient:
    """Base for services that talk to the exercise catalog over a shared ``httpx.AsyncClient``.

    Requests are attempted ``API_MAX_RETRIES + 1`` times. Only rate limiting, server errors and
    transport failures are retried; the delay starts at ``API_RETRY_INITIAL_DELAY`` and grows by
    ``API_RETRY_BACKOFF_FACTOR`` up to ``API_RETRY_MAX_DELAY``.
    """

    def __init__(self, client: httpx.AsyncClient, settings: APISettings) -> None:
        self.client = client
        self.api_url = settings.EXERCISE_API_URL.rstrip("/")
        self.max_retries = max(0, settings.API_MAX_RETRIES)
        self.initial_delay = settings.API_RETRY_INITIAL_DELAY
        self.backoff_factor = settings.API_RETRY_BACKOFF_FACTOR
        self.max_delay = settings.API_RETRY_MAX_DELAY
        self.default_timeout = settings.API_TIMEOUT

    def _build_url(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def _retry_delays(self) -> list[float]:
        delays: list[float] = []
        delay = self.initial_delay
        for _ in range(self.max_retries):
            delays.append(delay)
            delay = delay * self.backoff_factor if self.backoff_factor else delay
            if self.max_delay:
                delay = min(delay, self.max_delay)
        return delays

    async def _api_request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        allow_statuses: set[int] | None = None,
    ) -> tuple[int, Any | None]:
        request_kwargs: dict[str, Any] = {"headers": DEFAULT_HEADERS, "params": params}
        # httpx keeps its own default when no timeout is configured
        if timeout or self.default_timeout:
            request_kwargs["timeout"] = timeout or self.default_timeout

        delays = self._retry_delays()
        attempts = len(delays) + 1
        for attempt in range(1, attempts + 1):
            try:
                response = await self.client.request(method, url, **request_kwargs)
            except httpx.RequestError as exc:
                if attempt == attempts:
                    raise APIClientTransportError(f"{type(exc).__name__} calling {url}: {exc}", url=url) from exc
                logger.warning(f"catalog_request_retry url={url} attempt={attempt} error={type(exc).__name__}")
                await self._pause(delays[attempt - 1])
                continue

            status = response.status_code
            if response.is_success or status in (allow_statuses or ()):
                return status, self._parse_response_json(response)

            retryable = is_retryable_status(status)
            if retryable and attempt < attempts:
                logger.warning(f"catalog_request_retry url={url} attempt={attempt} status={status}")
                await self._pause(delays[attempt - 1])
                continue
            raise APIClientHTTPError(
                status,
                response.text,
                url=url,
                retryable=retryable,
                reason=self._extract_reason(response.text),
            )

        raise APIClientTransportError(f"Retries exhausted calling {url}", url=url)

    @staticmethod
    async def _pause(delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)

    @staticmethod
    def _parse_response_json(response: httpx.Response) -> Any | None:
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            logger.warning(f"catalog_response_not_json url={response.request.url} content_type={content_type!r}")
            return None
        try:
            return response.json()
        except (JSONDecodeError, UnicodeDecodeError):
            logger.warning(f"catalog_response_undecodable url={response.request.url}")
            return None

    @staticmethod
    def _extract_reason(body: str) -> str | None:
        try:
            data = loads(body) if body else None
        except JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        return next((data[field] for field in ("reason", "error", "message") if isinstance(data.get(field), str)), None)


__all__ = ["APIClient", "APIClientHTTPError", "APIClientTransportError", "APISettings", "is_retryable_status"]
