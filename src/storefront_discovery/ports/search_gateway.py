from __future__ import annotations

from abc import ABC, abstractmethod

from storefront_discovery.domain.product import ResultPage, SearchRequest


class SearchGateway(ABC):
    """
    Port for the backend discovery search.

    Implementations fetch exactly one page of one result set per call.
    ``total_count`` and ``total_pages`` in the returned page are the server's
    pagination metadata and are trusted as-is by callers.

    Contract:
        - Failures are raised as ``SearchFailure`` subclasses
          (``NetworkError``, ``InvalidRequestError``, ``ServerError``)
        - No retries happen inside the gateway; retrying is a user action
    """

    @abstractmethod
    async def search(self, request: SearchRequest) -> ResultPage:
        """
        Fetch one page of results.

        Args:
            request: Composed request including the page to fetch

        Returns:
            ResultPage with the page items and pagination metadata

        Raises:
            SearchFailure: If the page could not be fetched
        """
        ...
