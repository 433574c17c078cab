"""Setup fixtures for all tests."""

from collections.abc import AsyncGenerator
from typing import List, Optional

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from dor_fetcher.exceptions import FetcherError
from dor_fetcher.models import RawResult, SolrQuery
from dor_fetcher.routes import router
from dor_fetcher.services.fetcher import Fetcher, get_fetcher


class FakeSolrExecutor:
    """Stands in for SolrExecutor: records queries and returns a canned result."""

    def __init__(self) -> None:
        self.result: RawResult = RawResult(numFound=0, docs=[])
        self.error: Optional[FetcherError] = None
        self.queries: List[SolrQuery] = []

    async def execute(self, query: SolrQuery) -> RawResult:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_executor() -> FakeSolrExecutor:
    return FakeSolrExecutor()


@pytest.fixture
def fetcher(fake_executor: FakeSolrExecutor) -> Fetcher:
    return Fetcher(fake_executor)


@pytest.fixture
def app(fetcher: Fetcher) -> FastAPI:
    """FastAPI application with the routes wired to the fake executor."""
    app = FastAPI(title="Test DOR Fetcher")
    app.include_router(router)
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
