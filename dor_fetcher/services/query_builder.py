from typing import List, Optional

from dor_fetcher.config import (
    DEFAULT_ROWS,
    FIELD_RETURN_LIST,
    ID_FIELD,
    LAST_CHANGED_FIELD,
    REGISTERED_STATUS,
    TYPE_FIELD,
)
from dor_fetcher.models import (
    CONTROLLER_TYPES,
    FEDORA_TYPES,
    AllOfType,
    ControlledBy,
    ControllerType,
    FetchParams,
    Relation,
    SolrQuery,
    TaggedWith,
    TimeRange,
)
from dor_fetcher.services.identifiers import druid_for_solr, druid_of_controller
from dor_fetcher.services.times import get_times


def registered_only(params: Optional[FetchParams]) -> bool:
    """True if the user only wants registered objects (no date filtering)."""
    if params is None or not params.status:
        return False
    return params.status.lower() == REGISTERED_STATUS

def resolve_times(params: FetchParams) -> Optional[TimeRange]:
    """
    The date range a request is filtered on, or None for registered-only
    requests, whose dates are neither applied nor validated.
    """
    if registered_only(params):
        return None
    return get_times(params.first_modified, params.last_modified)

def date_range_clause(times: Optional[TimeRange]) -> str:
    """
    e.g. published_dttsim:["2014-01-01T00:00:00Z" TO "9999-12-31T23:59:59Z"]
    """
    if times is None:
        return ""
    return f'{LAST_CHANGED_FIELD}:["{times.first}" TO "{times.last}"]'

def get_rows(params: FetchParams) -> str:
    # if the user asks for a number of rows use it as-is, else return everything
    if params.rows is not None:
        return params.rows
    return str(DEFAULT_ROWS)

def escape_phrase(value: str) -> str:
    """Escapes a value for use inside a double quoted Solr phrase."""
    return value.replace('\\', '\\\\').replace('"', '\\"')

def relation_clause(relation: Relation) -> str:
    if isinstance(relation, AllOfType):
        return f'{TYPE_FIELD}:"{FEDORA_TYPES[relation.fedora_type]}"'
    if isinstance(relation, ControlledBy):
        controller_field = CONTROLLER_TYPES[relation.controller_type]
        return (
            f'({controller_field}:"{druid_of_controller(relation.druid)}"'
            f' OR {ID_FIELD}:"{druid_for_solr(relation.druid)}")'
        )
    if isinstance(relation, TaggedWith):
        return f'({CONTROLLER_TYPES[ControllerType.TAG]}:"{escape_phrase(relation.tag)}")'
    raise TypeError(f"Unsupported query relation: {relation!r}")

def build_query(params: FetchParams, relation: Relation, times: Optional[TimeRange] = None) -> SolrQuery:
    """
    Composes the Solr query for one of the three lookups: every object of a
    type, every object controlled by a druid (plus the controller itself),
    or every object carrying a tag. Unless the request is registered-only the
    change-date range is AND-ed on.

    times may be passed in when the caller already resolved them; otherwise
    they are resolved from params.
    """
    if registered_only(params):
        times = None
    elif times is None:
        times = resolve_times(params)
    clauses: List[str] = [relation_clause(relation)]
    date_q = date_range_clause(times)
    if date_q:
        clauses.append(date_q)
    return SolrQuery(
        q=" AND ".join(clauses),
        wt="json",
        fl=",".join(FIELD_RETURN_LIST),
        rows=get_rows(params),
    )
