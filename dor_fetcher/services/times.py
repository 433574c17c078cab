from datetime import datetime, timezone
from typing import List, Optional

from dateutil.parser import parse

from dor_fetcher.config import EARLIEST_DATE, LATEST_DATE
from dor_fetcher.exceptions import InvalidTimeRange, InternalConsistencyViolation
from dor_fetcher.models import TimeRange

# Fills in whatever the input leaves out: '2014-03' is 2014-03-01T00:00:00.
PARSE_DEFAULT: datetime = datetime(1970, 1, 1)


def to_timestamp(value: str) -> str:
    """
    Parses a loosely formatted date/time ('01/01/2014', '2014-01',
    'January 2014', '2014-01-01 12:00 -0500', ...) into a canonical UTC
    ISO8601 string. Missing month or day become 1, values without a zone are
    taken as UTC.
    """
    parsed: datetime = parse(value, default=PARSE_DEFAULT)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    else:
        parsed = parsed.astimezone(timezone.utc)
    # year padded by hand, strftime drops leading zeros before 1000
    return f"{parsed.year:04d}-{parsed:%m-%dT%H:%M:%S}Z"

def get_times(first_modified: Optional[str] = None, last_modified: Optional[str] = None) -> TimeRange:
    """
    Validates the user's first/last modified dates and converts them to
    canonical ISO8601.

    A missing first_modified becomes the epoch and a missing last_modified
    becomes LATEST_DATE, a fixed far-future sentinel, so open ended queries
    stay stable across calls. An empty string is not missing, it is invalid.

    Raises InvalidTimeRange if either date cannot be parsed, or if the
    resolved start is not strictly before the resolved end.

    >>> get_times('01/01/2014', '01/01/2015')
    TimeRange(first='2014-01-01T00:00:00Z', last='2015-01-01T00:00:00Z')
    """
    first = EARLIEST_DATE if first_modified is None else first_modified
    last = LATEST_DATE if last_modified is None else last_modified
    try:
        first_time = to_timestamp(first)
        last_time = to_timestamp(last)
    except (ValueError, OverflowError) as e:
        raise InvalidTimeRange(f"invalid time parameters: {e}") from e

    if first_time >= last_time:
        raise InvalidTimeRange(
            f"first_modified ({first_time}) must be before last_modified ({last_time})"
        )
    return TimeRange(first=first_time, last=last_time)

def determine_latest_date(times: TimeRange, last_changed: Optional[List[str]]) -> Optional[str]:
    """
    Picks the most recent change date that falls inside times (both ends
    inclusive). Returns None when there are no change dates at all.
    """
    if not last_changed:
        return None

    # canonical ISO8601 strings sort chronologically
    for changed in sorted(last_changed, reverse=True):
        if times.first <= changed <= times.last:
            return changed

    # Solr only returned this document because one of its dates matched the range
    raise InternalConsistencyViolation(
        f"no change date in {last_changed} falls between {times.first} and {times.last}"
    )
