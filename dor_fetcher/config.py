# dor_fetcher/config.py
import os
import re
from typing import Pattern, Tuple

# --- SOLR CONNECTION ---
SOLR_URL: str = os.getenv("SOLR_URL", "http://localhost:8983/solr/dor")
#SOLR_URL: str = "http://solr:8983/solr/dor" # for docker containers
SOLR_TIMEOUT: float = float(os.getenv("SOLR_TIMEOUT", "30.0"))
SOLR_RETRY_ATTEMPTS: int = int(os.getenv("SOLR_RETRY_ATTEMPTS", "1"))
SOLR_RETRY_BACKOFF_FACTOR: float = float(os.getenv("SOLR_RETRY_BACKOFF_FACTOR", "0.5"))
SOLR_MAX_CONCURRENCY: int = int(os.getenv("SOLR_MAX_CONCURRENCY", "20"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

SERVICE_NAME: str = "dor-fetcher-service"
SERVICE_VERSION: str = "1.0.0"


# --- INDEX FIELDS ---
ID_FIELD: str = "id"
LAST_CHANGED_FIELD: str = "published_dttsim"
TYPE_FIELD: str = "objectType_ssim"
TITLE_FIELD: str = "dc_title_tesim"
TITLE_FIELD_ALT: str = "dc_title_ssi"
CATKEY_FIELD: str = "catkey_id_ssim"

# Fields returned by every query, in this order.
FIELD_RETURN_LIST: Tuple[str, ...] = (
    ID_FIELD,
    LAST_CHANGED_FIELD,
    TYPE_FIELD,
    TITLE_FIELD,
    TITLE_FIELD_ALT,
    CATKEY_FIELD,
)


# --- IDENTIFIERS ---
FEDORA_PREFIX: str = "info:fedora/"
DRUID_PREFIX: str = "druid:"

DRUID_RE: Pattern[str] = re.compile(r'[a-zA-Z]{2}\d{3}[a-zA-Z]{2}\d{4}')


# --- QUERY DEFAULTS ---
# Effectively "every match" when the caller does not ask for a row count.
DEFAULT_ROWS: int = 100_000_000
# Row count that turns a request into a count-only request.
COUNT_ONLY_ROWS: str = "0"

EARLIEST_DATE: str = "1970-01-01T00:00:00Z"
LATEST_DATE: str = "9999-12-31T23:59:59Z"

REGISTERED_STATUS: str = "registered"
UNKNOWN_TYPE: str = "unknown_type"
