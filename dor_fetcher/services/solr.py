import asyncio
import time
from typing import Any

import httpx

from dor_fetcher.config import SOLR_MAX_CONCURRENCY, SOLR_RETRY_ATTEMPTS, SOLR_RETRY_BACKOFF_FACTOR
from dor_fetcher.exceptions import EmptySearchResponse, SearchBackendError
from dor_fetcher.http_client import fetch_with_retry
from dor_fetcher.logging_setup import logger
from dor_fetcher.models import RawResult, SolrQuery


class SolrExecutor:
    """
    Sends queries to a Solr core and returns the 'response' section of the
    answer. Transport failures are raised, never turned into empty results.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        handler: str = "select",
        max_concurrency: int = SOLR_MAX_CONCURRENCY,
        retry_attempts: int = SOLR_RETRY_ATTEMPTS,
        backoff_factor: float = SOLR_RETRY_BACKOFF_FACTOR,
    ):
        self.client = client
        self.handler = handler
        self.semaphore = asyncio.Semaphore(max_concurrency)
        self.retry_attempts = retry_attempts
        self.backoff_factor = backoff_factor

    async def execute(self, query: SolrQuery) -> RawResult:
        params = query.as_params()
        start_time = time.perf_counter()
        try:
            response = await fetch_with_retry(
                self.client,
                self.handler,
                self.semaphore,
                retry_attempts=self.retry_attempts,
                backoff_factor=self.backoff_factor,
                params=params,
            )
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            raise SearchBackendError(f"Solr query failed: {e}") from e
        elapsed = time.perf_counter() - start_time

        logger.info("Solr query", extra={"solr_params": params})
        logger.info(
            f"Query run time: {elapsed:.3f} seconds ({elapsed / 60.0:.2f} minutes)",
            extra={"elapsed_seconds": round(elapsed, 3)},
        )

        try:
            body = response.json()
        except ValueError as e:
            raise EmptySearchResponse(f"Solr returned a body that is not JSON: {e}") from e
        return parse_solr_response(body)


def parse_solr_response(body: Any) -> RawResult:
    """Extracts numFound and docs; a missing 'response' section is fatal."""
    section = body.get("response") if isinstance(body, dict) else None
    if not isinstance(section, dict):
        raise EmptySearchResponse("Empty response from Solr?")
    return RawResult(
        numFound=section.get("numFound") or 0,
        docs=section.get("docs") or [],
    )
