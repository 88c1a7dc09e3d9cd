"""Async HTTP client for the baseline feed, with bounded concurrency and retry."""

import asyncio

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from settings import API_TIMEOUT, BASELINE_API_URL, MAX_CONCURRENT

RETRY_ATTEMPTS = 3


def _is_retryable_error(exc: BaseException) -> bool:
    """Network failures and 5xx answers are retried; 4xx are final."""
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


def _log_retry(state: RetryCallState) -> None:
    logger.warning(
        "Baseline feed attempt {}/{} failed: {}",
        state.attempt_number,
        RETRY_ATTEMPTS,
        state.outcome.exception() if state.outcome else None,
    )


class BaseClient:
    """Use as ``async with``; one pooled httpx client per context."""

    def __init__(
        self,
        base_url: str = BASELINE_API_URL,
        timeout: float = API_TIMEOUT,
        max_concurrent: int = MAX_CONCURRENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.info("{}: {} (max_concurrent={})", self.__class__.__name__, self._base_url, max_concurrent)

    @property
    def request_count(self) -> int:
        return self._request_count

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        logger.info("Baseline feed requests: {}", self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception(_is_retryable_error),
        before_sleep=_log_retry,
        reraise=True,
    )
    async def _get(self, path: str, params: dict | None = None) -> dict | list:
        """GET ``path`` relative to the base URL and decode JSON."""
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} used outside 'async with'")
        async with self._sem:
            self._request_count += 1
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()


async def safe_request(coro, default=None):
    """Await ``coro``; on HTTP or JSON decode failure log and return ``default``."""
    try:
        return await coro
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Request failed: {}", e)
        return default
