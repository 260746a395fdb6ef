from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront_discovery.domain.product import MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE, SortOrder


class ProductResponseDTO(BaseModel):
    id: str
    title: str
    price: str
    currency: str = "USD"
    image_url: str | None = Field(default=None, alias="imageUrl")
    category: str | None = None
    seller_name: str | None = Field(default=None, alias="sellerName")
    country: str | None = None
    rating_avg: str | None = Field(default=None, alias="ratingAvg")
    rating_count: int = Field(default=0, alias="ratingCount")
    in_stock: bool = Field(default=True, alias="inStock")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    popularity: int = 0

    model_config = ConfigDict(populate_by_name=True)


class PaginationDTO(BaseModel):
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_pages: int = Field(ge=0, alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class DiscoverySearchResponseDTO(BaseModel):
    """Wire format of one page of discovery results."""

    items: list[ProductResponseDTO]
    pagination: PaginationDTO

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "items": [
                    {
                        "id": "p-1",
                        "title": "Kente Weave Tote",
                        "price": "45.00",
                        "currency": "USD",
                        "category": "Fashion",
                        "inStock": True,
                    }
                ],
                "pagination": {"total": 42, "page": 1, "limit": 18, "totalPages": 3},
            }
        },
    )


class DiscoverySearchQueryDTO(BaseModel):
    """Query parameters for searching the product catalog."""

    q: str | None = Field(
        default=None,
        description="Free-text search (case-insensitive substring of the title)",
        examples=["tote"],
        max_length=200,
    )
    category: str | None = Field(
        default=None,
        description="Filter by category (case-insensitive exact match)",
        examples=["Electronics"],
    )
    min_price: str | None = Field(
        default=None,
        alias="minPrice",
        description="Minimum price (inclusive, decimal as string)",
        examples=["50.00"],
        pattern=r"^\d+(\.\d{1,2})?$",
    )
    max_price: str | None = Field(
        default=None,
        alias="maxPrice",
        description="Maximum price (inclusive, decimal as string)",
        examples=["250.00"],
        pattern=r"^\d+(\.\d{1,2})?$",
    )
    rating: int | None = Field(
        default=None,
        description="Minimum average rating (0-5 stars)",
        examples=[4],
        ge=0,
        le=5,
    )
    in_stock: bool | None = Field(
        default=None,
        alias="inStock",
        description="Only products currently in stock",
        examples=[True],
    )
    country: str | None = Field(
        default=None,
        description="Seller country (case-insensitive exact match)",
        examples=["Kenya"],
    )
    sort: SortOrder = Field(
        default=SortOrder.TRENDING,
        description="Sort order",
    )
    page: int = Field(
        default=1,
        description="1-based page number",
        examples=[1],
        ge=1,
    )
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Maximum number of results per page",
        examples=[DEFAULT_PAGE_SIZE],
        ge=1,
        le=MAX_PAGE_SIZE,
    )

    model_config = ConfigDict(populate_by_name=True)
