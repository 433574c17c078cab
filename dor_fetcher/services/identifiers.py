from typing import Optional

from dor_fetcher.config import DRUID_RE, DRUID_PREFIX, FEDORA_PREFIX
from dor_fetcher.exceptions import InvalidIdentifier


def parse_druid(druid: Optional[str]) -> str:
    """
    Returns only the distinct part of a druid given in any format, e.g.
    'oo000oo0001', 'druid:oo000oo0001' or 'info:fedora/druid:oo000oo0001'
    all give 'oo000oo0001'. The first match wins.
    Raises InvalidIdentifier when no druid can be found.
    """
    match = DRUID_RE.search(druid) if isinstance(druid, str) else None
    if match is None:
        raise InvalidIdentifier(f"invalid druid: {druid!r}")
    return match.group(0)

def druid_of_controller(druid: Optional[str]) -> str:
    """'oo000oo0001' -> 'info:fedora/druid:oo000oo0001'"""
    return FEDORA_PREFIX + DRUID_PREFIX + parse_druid(druid)

def druid_for_solr(druid: Optional[str]) -> str:
    """'oo000oo0001' -> 'druid:oo000oo0001'"""
    return DRUID_PREFIX + parse_druid(druid)
