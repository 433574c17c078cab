import asyncio
import httpx
from dor_fetcher.config import SOLR_TIMEOUT, SOLR_RETRY_ATTEMPTS, SOLR_RETRY_BACKOFF_FACTOR
from dor_fetcher.logging_setup import logger

def get_async_client(base_url: str, timeout: float = SOLR_TIMEOUT) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient with HTTP/2 support and default timeouts.
    """
    return httpx.AsyncClient(base_url=base_url, http2=True, timeout=timeout)

async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    semaphore: asyncio.Semaphore,
    retry_attempts: int = SOLR_RETRY_ATTEMPTS,
    backoff_factor: float = SOLR_RETRY_BACKOFF_FACTOR,
    **kwargs
) -> httpx.Response:
    """
    Performs a GET request with a semaphore for concurrency control and
    exponential backoff for retries on transient errors. The last error is
    re-raised once the attempts are used up.
    """
    attempts = max(1, retry_attempts)
    async with semaphore:
        for attempt in range(attempts):
            try:
                response = await client.get(url, **kwargs)
                response.raise_for_status()
                return response

            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                if isinstance(e, httpx.HTTPStatusError) and 400 <= e.response.status_code < 500:
                    logger.error(f"Non-retriable HTTP error for {url}: {e}")
                    raise

                if attempt == attempts - 1:
                    logger.error(f"Final attempt failed for {url}: {e}")
                    raise

                wait_time = backoff_factor * (2 ** attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{attempts} failed for {url}. "
                    f"Retrying in {wait_time:.2f}s..."
                )
                await asyncio.sleep(wait_time)
        raise RuntimeError("Fetch with retry failed unexpectedly.")
