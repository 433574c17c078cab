from typing import Any, Dict, Union

from dor_fetcher.database import get_solr_executor
from dor_fetcher.models import (
    AllOfType,
    ControlledBy,
    ControllerType,
    FedoraType,
    FetchParams,
    Relation,
    TaggedWith,
)
from dor_fetcher.services.formatting import determine_proper_response
from dor_fetcher.services.query_builder import build_query, resolve_times
from dor_fetcher.services.solr import SolrExecutor

FetchResult = Union[int, Dict[str, Any]]


class Fetcher:
    """
    Answers the three lookups of the service against Solr: all objects of a
    Fedora type, all objects controlled by a druid and all objects with a
    tag. Holds no per-request state.
    """

    def __init__(self, executor: SolrExecutor):
        self.executor = executor

    async def find_all_fedora_type(self, params: FetchParams, fedora_type: FedoraType) -> FetchResult:
        """e.g. every collection, optionally limited by rows or dates."""
        return await self._run(params, AllOfType(fedora_type=fedora_type))

    async def find_all_under(self, params: FetchParams, controlled_by: ControllerType) -> FetchResult:
        """
        Every object governed by (apo) or a member of (collection) the druid
        in params.id, plus the controlling object itself.
        """
        return await self._run(params, ControlledBy(druid=params.id or "", controller_type=controlled_by))

    async def find_in_solr(self, params: FetchParams) -> FetchResult:
        """Every object carrying the tag in params.id."""
        return await self._run(params, TaggedWith(tag=params.id or ""))

    async def _run(self, params: FetchParams, relation: Relation) -> FetchResult:
        # dates and identifiers are validated before anything reaches Solr
        times = resolve_times(params)
        query = build_query(params, relation, times)
        result = await self.executor.execute(query)
        # TODO: when an APO in the result is itself governed by another APO, walk down to its objects too
        return determine_proper_response(params, result, times)


def get_fetcher() -> Fetcher:
    """FastAPI dependency giving a Fetcher bound to the shared Solr executor."""
    return Fetcher(get_solr_executor())
