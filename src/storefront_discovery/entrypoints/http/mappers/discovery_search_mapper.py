from __future__ import annotations

from decimal import Decimal

from storefront_discovery.domain.product import Product, ResultPage, SearchRequest
from storefront_discovery.entrypoints.http.dtos.discovery_search import (
    DiscoverySearchQueryDTO,
    DiscoverySearchResponseDTO,
    PaginationDTO,
    ProductResponseDTO,
)


class DiscoverySearchMapper:
    """Maps between wire DTOs and domain models for discovery search."""

    @staticmethod
    def to_domain_request(dto: DiscoverySearchQueryDTO) -> SearchRequest:
        """
        Converts query params to a domain request, handling Decimal conversion.

        Args:
            dto: The data transfer object containing search query parameters

        Returns:
            SearchRequest: Domain request with Decimal prices
        """
        return SearchRequest(
            q=dto.q or None,
            category=dto.category or None,
            min_price=Decimal(dto.min_price) if dto.min_price else None,
            max_price=Decimal(dto.max_price) if dto.max_price else None,
            rating=dto.rating or None,
            in_stock=True if dto.in_stock else None,
            country=dto.country or None,
            sort=dto.sort,
            page=dto.page,
            limit=dto.limit,
        )

    @staticmethod
    def to_product_response(product: Product) -> ProductResponseDTO:
        """
        Converts domain Product to wire DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return ProductResponseDTO(
            id=product.id,
            title=product.title,
            price=str(product.price),
            currency=product.currency,
            image_url=product.image_url,
            category=product.category,
            seller_name=product.seller_name,
            country=product.country,
            rating_avg=str(product.rating_avg) if product.rating_avg is not None else None,
            rating_count=product.rating_count,
            in_stock=product.in_stock,
            created_at=product.created_at,
            popularity=product.popularity,
        )

    @staticmethod
    def to_response(page: ResultPage, limit: int) -> DiscoverySearchResponseDTO:
        """
        Converts a domain result page to the wire response with pagination metadata.

        Args:
            page: Domain result page
            limit: Page size (echoed from request)

        Returns:
            DiscoverySearchResponseDTO: Items plus pagination metadata
        """
        return DiscoverySearchResponseDTO(
            items=[DiscoverySearchMapper.to_product_response(p) for p in page.items],
            pagination=PaginationDTO(
                total=page.total_count,
                page=page.page,
                limit=limit,
                total_pages=page.total_pages,
            ),
        )

    @staticmethod
    def to_product(dto: ProductResponseDTO) -> Product:
        """
        Converts a wire product to the domain entity.

        Raises:
            decimal.InvalidOperation: If price or rating is not a decimal string
        """
        return Product(
            id=dto.id,
            title=dto.title,
            price=Decimal(dto.price),
            currency=dto.currency,
            image_url=dto.image_url,
            category=dto.category,
            seller_name=dto.seller_name,
            country=dto.country,
            rating_avg=Decimal(dto.rating_avg) if dto.rating_avg is not None else None,
            rating_count=dto.rating_count,
            in_stock=dto.in_stock,
            created_at=dto.created_at,
            popularity=dto.popularity,
        )

    @staticmethod
    def to_result_page(dto: DiscoverySearchResponseDTO) -> ResultPage:
        return ResultPage(
            items=tuple(DiscoverySearchMapper.to_product(item) for item in dto.items),
            page=dto.pagination.page,
            total_count=dto.pagination.total,
            total_pages=dto.pagination.total_pages,
        )
