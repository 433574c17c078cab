# dor_fetcher/database.py
from typing import Optional
import httpx
from dor_fetcher.config import SOLR_URL, SOLR_TIMEOUT
from dor_fetcher.http_client import get_async_client
from dor_fetcher.logging_setup import logger
from dor_fetcher.services.solr import SolrExecutor

class Database:
    client: Optional[httpx.AsyncClient] = None
    executor: Optional[SolrExecutor] = None

db = Database()

async def connect_to_solr(url: str = SOLR_URL, timeout: float = SOLR_TIMEOUT):
    """Opens the shared HTTP connection pool to the Solr core."""
    logger.info("Connecting to Solr...", extra={"solr_url": url})
    db.client = get_async_client(url.rstrip("/") + "/", timeout=timeout)
    db.executor = SolrExecutor(db.client)
    logger.info("Solr client ready.")

async def close_solr_connection():
    """Closes the connection pool to Solr."""
    if db.client is None:
        return
    logger.info("Closing Solr connection...")
    await db.client.aclose()
    db.client = None
    db.executor = None
    logger.info("Solr connection closed.")

def is_connected() -> bool:
    return db.executor is not None

def get_solr_executor() -> SolrExecutor:
    """Returns the Solr executor instance."""
    if db.executor is None:
        raise RuntimeError("Solr is not connected. Call connect_to_solr() first.")
    return db.executor
