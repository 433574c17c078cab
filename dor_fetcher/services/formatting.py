from typing import Any, Dict, List, Optional, Union

from dor_fetcher.config import (
    CATKEY_FIELD,
    COUNT_ONLY_ROWS,
    ID_FIELD,
    LAST_CHANGED_FIELD,
    TITLE_FIELD,
    TITLE_FIELD_ALT,
    TYPE_FIELD,
    UNKNOWN_TYPE,
)
from dor_fetcher.models import FEDORA_TYPES, FetchParams, RawResult, TimeRange
from dor_fetcher.services.times import determine_latest_date, get_times
from dor_fetcher.textual_manipulation import first_value, is_blank, pluralize


def bucket_key(object_type: str) -> str:
    """
    Response key for an object type ('adminPolicy' -> 'adminpolicies').
    Used both to seed and to fill buckets, so the two always agree.
    """
    return pluralize(object_type.lower())

def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]

def determine_title(doc: Dict[str, Any]) -> str:
    """
    The primary title is read first, but a non-blank alternate title
    replaces it whenever one is present.
    """
    title = ""
    primary = first_value(doc.get(TITLE_FIELD))
    if not is_blank(primary):
        title = primary
    alternate = first_value(doc.get(TITLE_FIELD_ALT))
    if not is_blank(alternate):
        title = alternate
    return title

def format_record(doc: Dict[str, Any], times: TimeRange) -> Dict[str, Any]:
    """Shapes one Solr document into a {druid, latest_change, title, catkey?} stub."""
    record: Dict[str, Any] = {
        "druid": first_value(doc.get(ID_FIELD)) or "",
        "latest_change": determine_latest_date(times, as_list(doc.get(LAST_CHANGED_FIELD))),
        "title": determine_title(doc),
    }
    catkey = first_value(doc.get(CATKEY_FIELD))
    if not is_blank(catkey):
        record["catkey"] = catkey
    return record

def format_json(docs: List[Dict[str, Any]], times: TimeRange) -> Dict[str, Any]:
    """
    Groups Solr documents into one list per pluralized object type, drops the
    types with no documents and appends a 'counts' entry holding the size of
    every remaining list plus their 'total_count'.
    """
    all_json: Dict[str, Any] = {}

    # An empty list for each Fedora type, in enum order
    for type_value in FEDORA_TYPES.values():
        all_json[bucket_key(type_value)] = []

    for doc in docs:
        object_type = first_value(doc.get(TYPE_FIELD)) or UNKNOWN_TYPE
        all_json.setdefault(bucket_key(object_type), []).append(format_record(doc, times))

    counts: Dict[str, int] = {}
    total_count = 0
    for key in list(all_json):
        size = len(all_json[key])
        if size == 0:
            del all_json[key]
            continue
        counts[key] = size
        total_count += size
    counts["total_count"] = total_count
    all_json["counts"] = counts
    return all_json

def determine_proper_response(
    params: FetchParams,
    result: RawResult,
    times: Optional[TimeRange] = None,
) -> Union[int, Dict[str, Any]]:
    """
    Returns just numFound for count-only requests (rows == '0'), otherwise
    the grouped JSON. Without times, change dates are picked from the whole
    default range.
    """
    if params.rows == COUNT_ONLY_ROWS:
        return result.numFound
    return format_json(result.docs, times or get_times())
