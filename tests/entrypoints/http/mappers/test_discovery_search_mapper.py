"""
Test suite for DiscoverySearchMapper.

- Converts query DTOs to domain requests (Decimal conversion, unset → None)
- Converts domain products and pages to wire DTOs and back
- Handles Decimal ↔ str conversion at the boundary
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront_discovery.domain.product import Product, ResultPage, SearchRequest, SortOrder
from storefront_discovery.entrypoints.http.dtos.discovery_search import (
    DiscoverySearchQueryDTO,
    DiscoverySearchResponseDTO,
)
from storefront_discovery.entrypoints.http.mappers.discovery_search_mapper import (
    DiscoverySearchMapper,
)


def test_to_domain_request_with_all_fields() -> None:
    dto = DiscoverySearchQueryDTO(
        q="tote",
        category="Fashion",
        min_price="20.00",
        max_price="35.50",
        rating=3,
        in_stock=True,
        country="Ghana",
        sort=SortOrder.NEWEST,
        page=3,
        limit=24,
    )

    assert DiscoverySearchMapper.to_domain_request(dto) == SearchRequest(
        q="tote",
        category="Fashion",
        min_price=Decimal("20.00"),
        max_price=Decimal("35.50"),
        rating=3,
        in_stock=True,
        country="Ghana",
        sort=SortOrder.NEWEST,
        page=3,
        limit=24,
    )


def test_to_domain_request_defaults_are_unconstrained() -> None:
    dto = DiscoverySearchQueryDTO(rating=0, in_stock=False)

    assert DiscoverySearchMapper.to_domain_request(dto) == SearchRequest()


def test_query_dto_accepts_wire_names() -> None:
    dto = DiscoverySearchQueryDTO.model_validate({"minPrice": "5", "inStock": "true"})

    assert dto.min_price == "5"
    assert dto.in_stock is True


def test_product_round_trip_keeps_decimals() -> None:
    product = Product(
        id="p-1",
        title="Shea Butter",
        price=Decimal("12.10"),
        category="Beauty",
        rating_avg=Decimal("4.8"),
        rating_count=31,
        created_at=datetime(2024, 2, 2),
    )

    dto = DiscoverySearchMapper.to_product_response(product)

    assert dto.price == "12.10"
    assert dto.rating_avg == "4.8"
    assert DiscoverySearchMapper.to_product(dto) == product


def test_to_response_serializes_camel_case_pagination() -> None:
    page = ResultPage(items=(), page=2, total_count=42, total_pages=3)

    dto = DiscoverySearchMapper.to_response(page, limit=18)

    assert dto.model_dump(by_alias=True)["pagination"] == {
        "total": 42,
        "page": 2,
        "limit": 18,
        "totalPages": 3,
    }


def test_to_result_page_from_wire_body() -> None:
    body = {
        "items": [{"id": "p-9", "title": "Woven Basket", "price": "30", "inStock": False}],
        "pagination": {"total": 19, "page": 2, "limit": 18, "totalPages": 2},
    }

    page = DiscoverySearchMapper.to_result_page(DiscoverySearchResponseDTO.model_validate(body))

    assert page.page == 2
    assert page.total_count == 19
    assert page.has_more is False
    assert page.items[0].price == Decimal("30")
    assert page.items[0].in_stock is False
