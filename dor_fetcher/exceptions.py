"""Error kinds raised by the fetcher core."""

from typing import Optional


class FetcherError(Exception):
    """Base class for all errors raised while answering a fetch request."""

    def __init__(self, detail: Optional[str] = None, *args: object) -> None:
        self.detail = detail or "No detail provided."
        super().__init__(self.detail, *args)


class InvalidIdentifier(FetcherError):
    """The supplied identifier does not contain a druid."""


class InvalidTimeRange(FetcherError):
    """A modification date could not be parsed, or the range is empty."""


class EmptySearchResponse(FetcherError):
    """Solr answered without a usable ``response`` section."""


class SearchBackendError(FetcherError):
    """Solr could not be reached, timed out or answered with an HTTP error."""


class InternalConsistencyViolation(FetcherError):
    """
    No change date of a returned document falls inside the requested range.

    Solr filtered on that same range, so this points at a query/date
    alignment bug rather than bad input.
    """
