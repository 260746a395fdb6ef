"""
Test suite for GET /v1/discovery/search on the stub API.

- Query parameters are validated and mapped to a domain request
- The route delegates to the use case via dependency injection
- Responses carry items plus pagination metadata with camelCase keys
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront_discovery.adapters.in_memory_search_gateway import InMemorySearchGateway
from storefront_discovery.domain.product import Product, ResultPage, SearchRequest, SortOrder
from storefront_discovery.entrypoints.http.dependencies import (
    get_search_catalog_use_case,
    get_search_gateway,
)
from storefront_discovery.entrypoints.http.exception_handlers import register_exception_handlers
from storefront_discovery.entrypoints.http.routes.discovery import router
from storefront_discovery.use_cases.search_product_catalog import SearchProductCatalogResponse


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(
            id=f"p-{i}",
            title=f"Beaded Sandals {i}",
            price=Decimal(f"{i}.50"),
            category="Fashion" if i % 2 else "Beauty",
            rating_avg=Decimal("4.0"),
            created_at=datetime(2024, 1, i),
        )
        for i in range(1, 21)
    ]


@pytest.fixture
def gateway(products: list[Product]) -> InMemorySearchGateway:
    return InMemorySearchGateway(products)


@pytest.fixture
def app(gateway: InMemorySearchGateway) -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_search_gateway] = lambda: gateway
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# Happy Path
# ==============================================================================


def test_search_returns_first_page_with_pagination(client: TestClient) -> None:
    response = client.get("/v1/discovery/search", params={"limit": 8})

    assert response.status_code == 200
    data = response.json()
    assert len(data["items"]) == 8
    assert data["pagination"] == {"total": 20, "page": 1, "limit": 8, "totalPages": 3}


def test_search_maps_all_filters_to_domain(
    client: TestClient, gateway: InMemorySearchGateway
) -> None:
    response = client.get(
        "/v1/discovery/search",
        params={
            "q": "sandals",
            "category": "Fashion",
            "minPrice": "3.00",
            "maxPrice": "15",
            "rating": 4,
            "inStock": "true",
            "country": "Ghana",
            "sort": "price_desc",
            "page": 2,
            "limit": 5,
        },
    )

    assert response.status_code == 200
    assert gateway.requests == [
        SearchRequest(
            q="sandals",
            category="Fashion",
            min_price=Decimal("3.00"),
            max_price=Decimal("15"),
            rating=4,
            in_stock=True,
            country="Ghana",
            sort=SortOrder.PRICE_DESC,
            page=2,
            limit=5,
        )
    ]


def test_product_fields_use_camel_case(client: TestClient) -> None:
    response = client.get("/v1/discovery/search", params={"sort": "price_asc", "limit": 1})

    item = response.json()["items"][0]
    assert item["id"] == "p-1"
    assert item["price"] == "1.50"
    assert item["ratingAvg"] == "4.0"
    assert item["inStock"] is True
    assert item["createdAt"].startswith("2024-01-01")


def test_route_delegates_to_use_case(app: FastAPI, client: TestClient) -> None:
    use_case = AsyncMock()
    use_case.execute.return_value = SearchProductCatalogResponse(
        page=ResultPage(items=(), page=1, total_count=0, total_pages=0),
        limit=18,
    )
    app.dependency_overrides[get_search_catalog_use_case] = lambda: use_case

    response = client.get("/v1/discovery/search", params={"q": "lamp"})

    assert response.status_code == 200
    use_case.execute.assert_awaited_once_with(SearchRequest(q="lamp"))
    assert response.json() == {
        "items": [],
        "pagination": {"total": 0, "page": 1, "limit": 18, "totalPages": 0},
    }


# ==============================================================================
# Validation Errors
# ==============================================================================


@pytest.mark.parametrize(
    "params",
    [
        {"page": 0},
        {"limit": 101},
        {"sort": "cheapest"},
        {"minPrice": "abc"},
        {"rating": 6},
    ],
)
def test_invalid_query_parameters_return_422(client: TestClient, params: dict) -> None:
    response = client.get("/v1/discovery/search", params=params)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_inverted_price_range_returns_422(client: TestClient) -> None:
    response = client.get("/v1/discovery/search", params={"minPrice": "50", "maxPrice": "10"})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "min_price cannot be greater than max_price",
        "code": "VALIDATION_ERROR",
        "errors": [
            {"field": "minPrice", "message": "min_price cannot be greater than max_price"}
        ],
    }
