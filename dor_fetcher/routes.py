# dor_fetcher/routes.py

from typing import Awaitable, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import ORJSONResponse
from dor_fetcher.config import SERVICE_NAME, SERVICE_VERSION
from dor_fetcher.database import is_connected
from dor_fetcher.exceptions import (
    EmptySearchResponse,
    InternalConsistencyViolation,
    InvalidIdentifier,
    InvalidTimeRange,
    SearchBackendError,
)
from dor_fetcher.logging_setup import logger
from dor_fetcher.models import ControllerType, FedoraType, FetchParams
from dor_fetcher.services.fetcher import Fetcher, FetchResult, get_fetcher

router = APIRouter()

def fetch_params(
    status_: Optional[str] = Query(None, alias="status", description="'registered' ignores the date range"),
    first_modified: Optional[str] = Query(None, description="Earliest change date, any common format"),
    last_modified: Optional[str] = Query(None, description="Latest change date, any common format"),
    rows: Optional[str] = Query(None, description="Maximum number of objects; 0 returns only the count"),
) -> FetchParams:
    return FetchParams(status=status_, first_modified=first_modified, last_modified=last_modified, rows=rows)

async def run_fetch(call: Awaitable[FetchResult]) -> FetchResult:
    """
    Awaits a fetcher call and turns its errors into HTTP errors.
    """
    try:
        return await call
    except (InvalidIdentifier, InvalidTimeRange) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.detail)
    except (EmptySearchResponse, SearchBackendError) as e:
        logger.error("Solr lookup failed", extra={"error": e.detail})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.detail)
    except InternalConsistencyViolation as e:
        logger.critical("Latest change date lookup failed", extra={"error": e.detail})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.detail)

@router.get("/health/ready", tags=["Health"])
def get_readiness_status():
    """
    Readiness check confirming that the Solr client is up.
    """
    if is_connected():
        return {"status": "ready"}
    return ORJSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "solr_not_connected"}
    )

@router.get("/about", tags=["Metadata"])
def about():
    return {"name": SERVICE_NAME, "version": SERVICE_VERSION}

@router.get("/collections", tags=["Collections"])
async def all_collections(
    params: FetchParams = Depends(fetch_params),
    fetcher: Fetcher = Depends(get_fetcher),
):
    """
    Lists every collection.
    """
    return await run_fetch(fetcher.find_all_fedora_type(params, FedoraType.COLLECTION))

@router.get("/collections/{id}", tags=["Collections"])
async def collection_members(
    id: str,
    params: FetchParams = Depends(fetch_params),
    fetcher: Fetcher = Depends(get_fetcher),
):
    """
    Lists the collection itself and every object that is a member of it.
    """
    params.id = id
    return await run_fetch(fetcher.find_all_under(params, ControllerType.COLLECTION))

@router.get("/apos", tags=["APOs"])
async def all_apos(
    params: FetchParams = Depends(fetch_params),
    fetcher: Fetcher = Depends(get_fetcher),
):
    """
    Lists every administrative policy object.
    """
    return await run_fetch(fetcher.find_all_fedora_type(params, FedoraType.APO))

@router.get("/apos/{id}", tags=["APOs"])
async def apo_governed(
    id: str,
    params: FetchParams = Depends(fetch_params),
    fetcher: Fetcher = Depends(get_fetcher),
):
    """
    Lists the APO itself and every object it governs.
    """
    params.id = id
    return await run_fetch(fetcher.find_all_under(params, ControllerType.APO))

@router.get("/tags/{tag:path}", tags=["Tags"])
async def tagged(
    tag: str,
    params: FetchParams = Depends(fetch_params),
    fetcher: Fetcher = Depends(get_fetcher),
):
    """
    Lists every object with the given tag.
    """
    params.id = tag
    return await run_fetch(fetcher.find_in_solr(params))
