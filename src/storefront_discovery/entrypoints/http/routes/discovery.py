from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront_discovery.entrypoints.http.dtos.discovery_search import (
    DiscoverySearchQueryDTO,
    DiscoverySearchResponseDTO,
)
from storefront_discovery.entrypoints.http.dependencies import get_search_catalog_use_case
from storefront_discovery.entrypoints.http.error_responses import ErrorResponse
from storefront_discovery.entrypoints.http.mappers.discovery_search_mapper import (
    DiscoverySearchMapper,
)
from storefront_discovery.use_cases.search_product_catalog import SearchProductCatalog


router = APIRouter(tags=["Discovery"])


@router.get(
    "/discovery/search",
    response_model=DiscoverySearchResponseDTO,
    summary="Search the product catalog",
    description="""
    Page through the product catalog with optional filters and a sort order.

    ## Filters
    - All filters use AND semantics
    - q: case-insensitive substring of the title
    - category/country: case-insensitive exact match
    - minPrice/maxPrice: inclusive range, decimal strings
    - rating: minimum average rating

    ## Pagination
    - 1-based `page`, default `limit` 18, max 100
    - `totalPages` in the response is authoritative

    ## Example
    ```
    GET /v1/discovery/search?category=Electronics&maxPrice=250&sort=price_asc&page=2
    ```
    """,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
async def search_products(
    query: Annotated[DiscoverySearchQueryDTO, Query()],
    use_case: SearchProductCatalog = Depends(get_search_catalog_use_case),
) -> DiscoverySearchResponseDTO:
    """Search endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = DiscoverySearchMapper.to_domain_request(query)

    # 2. Execute use case
    result = await use_case.execute(request)

    # 3. Map to response
    return DiscoverySearchMapper.to_response(result.page, limit=result.limit)
