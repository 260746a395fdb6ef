from __future__ import annotations

from storefront_discovery.infra.catalog_seed import CATEGORIES, seed_products


def test_seed_is_deterministic() -> None:
    assert seed_products() == seed_products()


def test_seed_respects_count_and_price_bands() -> None:
    products = seed_products(count=30)

    assert len(products) == 30
    assert len({p.id for p in products}) == 30
    for product in products:
        low, high = CATEGORIES[product.category]
        assert low <= product.price <= high


def test_different_seeds_differ() -> None:
    assert seed_products(seed=1) != seed_products(seed=2)
