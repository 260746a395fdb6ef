from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from storefront_discovery.domain.errors import ValidationError


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


# ==============================================================================
# Constants
# ==============================================================================

# Upper end of the price slider; a range ending here means "no upper bound"
PRICE_CEILING = Decimal("1000")
DEFAULT_PAGE_SIZE = 18
MAX_PAGE_SIZE = 100
RATING_VALUES = frozenset(range(0, 6))


class SortOrder(str, Enum):
    TRENDING = "trending"
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING = "rating"
    POPULAR = "popular"

    @classmethod
    def parse(cls, value: str | None) -> SortOrder | None:
        """Return the matching sort order, or None for unknown values."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    price: Decimal
    currency: str = "USD"
    image_url: str | None = None
    category: str | None = None
    seller_name: str | None = None
    country: str | None = None
    rating_avg: Decimal | None = None
    rating_count: int = 0
    in_stock: bool = True
    created_at: datetime | None = None
    popularity: int = 0


def _wire_amount(value: Decimal) -> str:
    # Plain notation, no exponent
    return format(value, "f")


def _invalid(
    error_class: type[ValidationError], field: str, message: str
) -> ValidationError:
    return error_class(message, errors=[{"field": field, "message": message}])


def _ordered_unique(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Sidebar facets as selected by the shopper."""

    price_range: tuple[Decimal, Decimal] = (Decimal("0"), PRICE_CEILING)
    categories: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    rating: int = 0
    in_stock: bool = False
    free_shipping: bool = False

    def __post_init__(self) -> None:
        # Selection order is kept; repeated selections collapse
        object.__setattr__(self, "categories", _ordered_unique(tuple(self.categories)))
        object.__setattr__(self, "brands", _ordered_unique(tuple(self.brands)))

    @property
    def primary_category(self) -> str | None:
        return self.categories[0] if self.categories else None


@dataclass(frozen=True, slots=True)
class FilterState:
    """Every discovery input except sort order, from all widgets that edit it."""

    options: FilterOptions = field(default_factory=FilterOptions)
    query: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """
    Canonical description of one discovery query.

    Requests that differ only in ``page`` belong to the same result set.
    ``None`` means the field is unconstrained and is not sent.
    """

    q: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    rating: int | None = None
    in_stock: bool | None = None
    country: str | None = None
    sort: SortOrder = SortOrder.TRENDING
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def base(self) -> SearchRequest:
        """The same request pinned to the first page."""
        if self.page == 1:
            return self
        return replace(self, page=1)

    def for_page(self, page: int) -> SearchRequest:
        return replace(self, page=page)

    def same_result_set(self, other: SearchRequest) -> bool:
        return self.base == other.base

    def validate(self) -> None:
        """
        Validate the request before it is sent.

        Each failure names the offending wire parameter in ``errors``.

        Raises:
            PagingValidationError: If page or limit are out of range
            FilterValidationError: If price bounds or rating are invalid
        """
        if self.page < 1:
            raise _invalid(PagingValidationError, "page", "page must be >= 1")
        if self.limit <= 0:
            raise _invalid(PagingValidationError, "limit", "limit must be > 0")
        if self.limit > MAX_PAGE_SIZE:
            raise _invalid(PagingValidationError, "limit", f"limit must be <= {MAX_PAGE_SIZE}")

        for name, param in (("min_price", "minPrice"), ("max_price", "maxPrice")):
            value = getattr(self, name)
            if value is None:
                continue
            # No floats past the boundary
            if not isinstance(value, Decimal):
                raise _invalid(FilterValidationError, param, f"{name} must be Decimal or None")
            if not value.is_finite() or value < 0:
                raise _invalid(
                    FilterValidationError, param, f"{name} must be a finite, non-negative amount"
                )
            if value.normalize().as_tuple().exponent < -2:
                raise _invalid(
                    FilterValidationError, param, f"{name} must have at most two decimal places"
                )

        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise _invalid(
                FilterValidationError, "minPrice", "min_price cannot be greater than max_price"
            )
        if self.rating is not None and self.rating not in RATING_VALUES:
            raise _invalid(
                FilterValidationError, "rating", "rating must be an integer between 0 and 5"
            )

    def to_query_params(self) -> dict[str, str]:
        """Render the wire parameters, dropping unconstrained fields."""
        params: dict[str, str | None] = {
            "q": self.q,
            "category": self.category,
            "minPrice": _wire_amount(self.min_price) if self.min_price is not None else None,
            "maxPrice": _wire_amount(self.max_price) if self.max_price is not None else None,
            "rating": str(self.rating) if self.rating is not None else None,
            "inStock": "true" if self.in_stock else None,
            "country": self.country,
            "sort": self.sort.value,
            "page": str(self.page),
            "limit": str(self.limit),
        }
        return {key: value for key, value in params.items() if value not in (None, "")}


@dataclass(frozen=True, slots=True)
class ResultPage:
    """One fetched batch of a result set, with server pagination metadata."""

    items: tuple[Product, ...]
    page: int
    total_count: int
    total_pages: int

    @property
    def has_more(self) -> bool:
        # Server metadata is authoritative; item counts are never used to guess
        return self.page < self.total_pages
