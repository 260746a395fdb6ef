"""
Deterministic demo catalog for the stub discovery API.

- Deterministic: fixed seed → same catalog every run
- Realism-lite: prices follow a per-category band, ratings cluster high
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal

from storefront_discovery.domain.product import Product

RANDOM_SEED = 42
NUM_PRODUCTS = 120

CATEGORIES = {
    "Electronics": (Decimal("40"), Decimal("950")),
    "Fashion": (Decimal("12"), Decimal("180")),
    "Home & Garden": (Decimal("15"), Decimal("400")),
    "Beauty": (Decimal("6"), Decimal("90")),
    "Books": (Decimal("5"), Decimal("45")),
    "Sports": (Decimal("10"), Decimal("300")),
}

SELLERS = [
    ("Adire Studio", "Nigeria"),
    ("Nairobi Makers", "Kenya"),
    ("Accra Threads", "Ghana"),
    ("Lagos Gadget Hub", "Nigeria"),
    ("Kilimani Home", "Kenya"),
]

TITLE_WORDS = {
    "Electronics": ["Wireless Earbuds", "Solar Power Bank", "Bluetooth Speaker", "Smart Watch"],
    "Fashion": ["Kente Weave Tote", "Ankara Shirt", "Beaded Sandals", "Adire Scarf"],
    "Home & Garden": ["Woven Basket", "Clay Planter", "Mudcloth Cushion", "Teak Serving Board"],
    "Beauty": ["Shea Butter", "Black Soap", "Baobab Oil", "Hibiscus Lip Balm"],
    "Books": ["Poetry Collection", "Cookbook", "Travel Guide", "Children's Stories"],
    "Sports": ["Yoga Mat", "Football", "Running Vest", "Jump Rope"],
}

_EPOCH = datetime(2024, 1, 1)


def _price(rng: random.Random, low: Decimal, high: Decimal) -> Decimal:
    cents = rng.randint(int(low * 100), int(high * 100))
    return (Decimal(cents) / Decimal(100)).quantize(Decimal("0.01"))


def seed_products(count: int = NUM_PRODUCTS, seed: int = RANDOM_SEED) -> list[Product]:
    rng = random.Random(seed)
    products: list[Product] = []

    for index in range(count):
        category = rng.choice(list(CATEGORIES))
        low, high = CATEGORIES[category]
        seller_name, country = rng.choice(SELLERS)
        rating = Decimal(str(round(rng.uniform(2.5, 5.0), 1)))

        products.append(
            Product(
                id=f"p-{index + 1:04d}",
                title=f"{rng.choice(TITLE_WORDS[category])} #{index + 1}",
                price=_price(rng, low, high),
                category=category,
                seller_name=seller_name,
                country=country,
                rating_avg=rating,
                rating_count=rng.randint(0, 400),
                in_stock=rng.random() > 0.15,
                created_at=_EPOCH + timedelta(days=rng.randint(0, 600)),
                popularity=rng.randint(0, 1000),
            )
        )

    return products
