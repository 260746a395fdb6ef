"""
Dependency injection for the stub discovery API.

The seeded catalog is an immutable list and is built once; gateways and use
cases are cheap and created per request.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from storefront_discovery.adapters.in_memory_search_gateway import InMemorySearchGateway
from storefront_discovery.domain.product import Product
from storefront_discovery.infra.catalog_seed import seed_products
from storefront_discovery.ports.search_gateway import SearchGateway
from storefront_discovery.use_cases.search_product_catalog import SearchProductCatalog


@lru_cache
def get_catalog() -> tuple[Product, ...]:
    """The demo catalog, generated once per process."""
    return tuple(seed_products())


def get_search_gateway() -> SearchGateway:
    return InMemorySearchGateway(list(get_catalog()))


def get_search_catalog_use_case(
    gateway: SearchGateway = Depends(get_search_gateway),
) -> SearchProductCatalog:
    """
    Factory function that returns a configured SearchProductCatalog use case.

    Args:
        gateway: Search gateway (injected by FastAPI via Depends(get_search_gateway))

    Returns:
        SearchProductCatalog: Configured use case instance
    """
    return SearchProductCatalog(search_gateway=gateway)
