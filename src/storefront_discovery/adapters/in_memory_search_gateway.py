from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal

from storefront_discovery.domain.product import (
    Product,
    ResultPage,
    SearchRequest,
    SortOrder,
)
from storefront_discovery.ports.search_gateway import SearchGateway


class InMemorySearchGateway(SearchGateway):
    """
    Canonical contract implementation for tests and the stub API.

    - Stores products in insertion order
    - Applies AND-semantics filtering
    - Sorts with a stable sort (ties keep catalog order)
    - Applies paging AFTER filtering and sorting
    - Reports total_count of matching products before paging
    """

    def __init__(self, products: list[Product]) -> None:
        self._products = products
        self.requests: list[SearchRequest] = []

    async def search(self, request: SearchRequest) -> ResultPage:
        self.requests.append(request)

        matches = [product for product in self._products if self._matches(product, request)]
        matches = self._sorted(matches, request.sort)
        total_count = len(matches)  # Count BEFORE paging
        total_pages = math.ceil(total_count / request.limit)

        start = (request.page - 1) * request.limit
        end = start + request.limit

        return ResultPage(
            items=tuple(matches[start:end]),
            page=request.page,
            total_count=total_count,
            total_pages=total_pages,
        )

    def _matches(self, product: Product, request: SearchRequest) -> bool:
        if request.q and request.q.lower() not in product.title.lower():
            return False
        if request.category and (product.category or "").lower() != request.category.lower():
            return False
        if request.min_price is not None and product.price < request.min_price:
            return False
        if request.max_price is not None and product.price > request.max_price:
            return False
        if request.rating is not None and (product.rating_avg or 0) < request.rating:
            return False
        if request.in_stock and not product.in_stock:
            return False
        if request.country and (product.country or "").lower() != request.country.lower():
            return False
        return True

    def _sorted(self, products: list[Product], sort: SortOrder) -> list[Product]:
        if sort in (SortOrder.TRENDING, SortOrder.POPULAR):
            return sorted(products, key=lambda p: p.popularity, reverse=True)
        if sort is SortOrder.NEWEST:
            return sorted(products, key=lambda p: p.created_at or datetime.min, reverse=True)
        if sort is SortOrder.PRICE_ASC:
            return sorted(products, key=lambda p: p.price)
        if sort is SortOrder.PRICE_DESC:
            return sorted(products, key=lambda p: p.price, reverse=True)
        if sort is SortOrder.RATING:
            return sorted(products, key=lambda p: p.rating_avg or Decimal("0"), reverse=True)
        return list(products)
