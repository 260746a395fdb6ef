from __future__ import annotations

from dataclasses import dataclass

from storefront_discovery.domain.product import ResultPage, SearchRequest
from storefront_discovery.ports.search_gateway import SearchGateway


@dataclass(frozen=True, slots=True)
class SearchProductCatalogResponse:
    page: ResultPage
    limit: int


class SearchProductCatalog:
    """
    Serve one page of the product catalog for the stub discovery API.

    This use case validates the request and delegates filtering, sorting and
    paging to the gateway. No filtering logic exists in the use case.
    """

    def __init__(self, search_gateway: SearchGateway) -> None:
        self._gateway = search_gateway

    async def execute(self, request: SearchRequest) -> SearchProductCatalogResponse:
        """
        Execute catalog search.

        Args:
            request: Composed search request including page and limit

        Returns:
            Response containing the result page and the page size used

        Raises:
            PagingValidationError: If page or limit are invalid
            FilterValidationError: If price bounds or rating are invalid
        """
        # Validate inputs (UseCase responsibility per contract)
        request.validate()

        page = await self._gateway.search(request)

        return SearchProductCatalogResponse(page=page, limit=request.limit)
