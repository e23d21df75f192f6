import asyncio
from typing import Awaitable, Callable, Optional

import httpx

from app.features.seo.schemas.scrape import FetchMetadata, FetchResult
from app.platform.config import settings
from app.platform.exceptions import ScrapeError
from app.platform.logger import get_logger, log_scrape_error

logger = get_logger(__name__)


class EmptyScrapeResponse(Exception):
    """The provider answered but returned no markup."""


class ScrapeService:
    """
    Fetches rendered HTML through the scrape.do API with linear backoff.

    Attempt n that fails with a retryable error waits `retry_delay_ms * n`
    before attempt n + 1. Non-retryable failures abort immediately.
    """

    RETRY_MESSAGES = ("timeout", "econnrefused", "econnreset", "epipe", "rate limit")

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        render_js: Optional[bool] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = settings.SCRAPE_DO_API_KEY if api_key is None else api_key
        self.base_url = base_url or settings.SCRAPE_DO_BASE_URL
        self.timeout_ms = timeout_ms or settings.SCRAPE_TIMEOUT_MS
        self.render_js = settings.SCRAPE_RENDER_JS if render_js is None else render_js
        self._client = client
        self._sleep = sleep

    def _params(self, url: str) -> dict:
        params = {"token": self.api_key, "url": url}
        if self.render_js:
            params["render"] = "true"
        return params

    async def _fetch_once(self, client: httpx.AsyncClient, url: str, timeout_ms: int) -> FetchResult:
        response = await client.get(
            self.base_url,
            params=self._params(url),
            timeout=timeout_ms / 1000,
        )
        response.raise_for_status()

        if not response.text:
            raise EmptyScrapeResponse("Invalid response format from scraping service")

        return FetchResult(
            html=response.text,
            metadata=FetchMetadata(
                status_code=response.status_code,
                headers=dict(response.headers),
                timing={"elapsedMs": int(response.elapsed.total_seconds() * 1000)},
                url=url,
            ),
        )

    @staticmethod
    def describe_error(error: Exception) -> str:
        """Human-readable message that keeps the words upstream classification looks for."""
        if isinstance(error, httpx.TimeoutException):
            return f"Request timeout: {error}" if str(error) else "Request timeout"
        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code == 429:
                return "Scraping provider rate limit exceeded (HTTP 429)"
            return f"Scraping provider responded with status code {status_code}"
        return str(error) or error.__class__.__name__

    @staticmethod
    def should_retry(error: Exception) -> bool:
        response = getattr(error, "response", None)

        # Network level failure: nothing came back
        if response is None:
            return True

        if response.status_code == 429 or response.status_code >= 500:
            return True

        # The raw status error text carries the provider URL and the target URL
        message = ScrapeService.describe_error(error).lower()
        return any(msg in message for msg in ScrapeService.RETRY_MESSAGES)

    async def scrape_url(
        self,
        url: str,
        max_retries: Optional[int] = None,
        retry_delay_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> FetchResult:
        """
        Fetch `url` through the rendering provider, retrying transient failures.

        Raises:
            ScrapeError: after the last retryable attempt, or on the first
                non-retryable failure
        """
        max_retries = max_retries or settings.SCRAPE_MAX_RETRIES
        retry_delay_ms = settings.SCRAPE_RETRY_DELAY_MS if retry_delay_ms is None else retry_delay_ms
        timeout_ms = timeout_ms or self.timeout_ms

        if self._client is not None:
            return await self._scrape_with_client(self._client, url, max_retries, retry_delay_ms, timeout_ms)

        async with httpx.AsyncClient() as client:
            return await self._scrape_with_client(client, url, max_retries, retry_delay_ms, timeout_ms)

    async def _scrape_with_client(
        self,
        client: httpx.AsyncClient,
        url: str,
        max_retries: int,
        retry_delay_ms: int,
        timeout_ms: int,
    ) -> FetchResult:
        last_error: Optional[Exception] = None
        attempts = 0

        for attempt in range(1, max_retries + 1):
            attempts = attempt
            try:
                result = await self._fetch_once(client, url, timeout_ms)
                logger.info(
                    f"Successfully scraped {url} on attempt {attempt} "
                    f"(status {result.metadata.status_code})"
                )
                return result

            except (httpx.HTTPError, EmptyScrapeResponse) as e:
                last_error = e
                status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
                logger.warning(
                    f"Scraping attempt {attempt} failed for {url}: "
                    f"{self.describe_error(e)} (status={status_code})"
                )

                if self.should_retry(e) and attempt < max_retries:
                    await self._sleep(retry_delay_ms * attempt / 1000)
                    continue

                break

        message = self.describe_error(last_error)
        log_scrape_error(logger, url, message)
        raise ScrapeError(
            f"Failed to scrape URL after {attempts} attempts: {message}",
            attempts=attempts,
            last_error=message,
        )
