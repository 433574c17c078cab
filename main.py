import time
import uuid
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from asgi_correlation_id import CorrelationIdMiddleware

from dor_fetcher.config import SERVICE_VERSION
from dor_fetcher.logging_setup import setup_logging, logger
from dor_fetcher.routes import router
from dor_fetcher.database import connect_to_solr, close_solr_connection

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    setup_logging()
    logger.info("--- Application Starting Up ---")

    try:
        await connect_to_solr()
    except Exception as e:
        logger.critical(f"Could not set up the Solr client on startup: {e}", exc_info=True)
        # Exit with a non-zero status code to tell Docker the container failed
        sys.exit(1)

    yield
    await close_solr_connection()
    logger.info("--- Application Shutting Down ---")

app = FastAPI(
    title="DOR Fetcher Service",
    description="Lists the objects of a type, under a controlling object or carrying a tag, from the DOR Solr index.",
    version=SERVICE_VERSION,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)


# MIDDLEWARE CONFIGURATION

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(CorrelationIdMiddleware)

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Global middleware to handle logging and uncaught exceptions.
    """
    start_time = time.time()
    client_ip = request.client.host if request.client else None
    logger.info(
        "Request received",
        extra={"method": request.method, "url": str(request.url), "client_ip": client_ip}
    )
    try:
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "process_time_ms": f"{process_time:.2f}",
            },
        )
        return response
    except Exception as e:
        correlation_id = getattr(request.state, 'correlation_id', str(uuid.uuid4()))
        logger.critical(
            "Unhandled exception",
            extra={"method": request.method, "url": str(request.url), "error": str(e)},
            exc_info=True,
        )
        return ORJSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred.",
                "correlation_id": correlation_id,
            },
        )

#ROUTER INCLUSION
app.include_router(router)
