"""
Test suite for SearchProductCatalog (stub API use case).

- Validates the request before delegating
- Delegates filtering and paging to the gateway
- Echoes the page size used
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from storefront_discovery.domain.errors import ValidationError
from storefront_discovery.domain.product import (
    FilterValidationError,
    PagingValidationError,
    ResultPage,
    SearchRequest,
)
from storefront_discovery.ports.search_gateway import SearchGateway
from storefront_discovery.use_cases.search_product_catalog import (
    SearchProductCatalog,
    SearchProductCatalogResponse,
)


@pytest.fixture()
def mock_gateway() -> Mock:
    """Mock gateway for testing the use case in isolation."""
    gateway = Mock(spec=SearchGateway)
    gateway.search = AsyncMock(
        return_value=ResultPage(items=(), page=1, total_count=0, total_pages=0)
    )
    return gateway


@pytest.mark.asyncio
async def test_execute_delegates_to_gateway(mock_gateway: Mock) -> None:
    use_case = SearchProductCatalog(mock_gateway)
    request = SearchRequest(category="Books", limit=12)

    response = await use_case.execute(request)

    mock_gateway.search.assert_awaited_once_with(request)
    assert isinstance(response, SearchProductCatalogResponse)
    assert response.limit == 12
    assert response.page.total_count == 0


@pytest.mark.asyncio
async def test_invalid_paging_never_reaches_gateway(mock_gateway: Mock) -> None:
    use_case = SearchProductCatalog(mock_gateway)

    with pytest.raises(PagingValidationError):
        await use_case.execute(SearchRequest(page=0))

    mock_gateway.search.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_filters_never_reach_gateway(mock_gateway: Mock) -> None:
    use_case = SearchProductCatalog(mock_gateway)

    with pytest.raises(FilterValidationError) as exc_info:
        await use_case.execute(SearchRequest(min_price=Decimal("9"), max_price=Decimal("1")))

    assert isinstance(exc_info.value, ValidationError)
    mock_gateway.search.assert_not_called()
