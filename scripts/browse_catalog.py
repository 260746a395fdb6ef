#!/usr/bin/env python3
"""
Page through the discovery endpoint the way the storefront grid does.

Features:
- Composes the request from URL-style arguments (key=value)
- Fetches page 1, then keeps loading until the server reports no more pages
- Prints one line per product plus the session totals

Usage:
    DISCOVERY_API_URL=http://localhost:8000 python scripts/browse_catalog.py category=Fashion sort=price_asc
    # against the stub API (pip install -e ".[serve]"):
    uvicorn storefront_discovery.entrypoints.http.app:app --app-dir src
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storefront_discovery.adapters.http_search_gateway import HttpSearchGateway
from storefront_discovery.infra.config import page_size
from storefront_discovery.use_cases.compose_search_request import QueryComposer
from storefront_discovery.use_cases.discover_products import DiscoveryEngine


MAX_PAGES = 10  # Stop scrolling after this many pages


def parse_args(argv: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for arg in argv:
        key, sep, value = arg.partition("=")
        if not sep:
            raise SystemExit(f"Expected key=value, got {arg!r}")
        params[key] = value
    return params


async def main(argv: list[str]) -> int:
    gateway = HttpSearchGateway.from_env()
    engine = DiscoveryEngine(gateway, composer=QueryComposer(page_size=page_size()))

    try:
        await engine.mount(parse_args(argv))
        for _ in range(MAX_PAGES - 1):
            session = engine.snapshot
            if session is None or not session.has_more or session.error:
                break
            await engine.load_more()
    finally:
        await engine.aclose()
        await gateway.aclose()

    session = engine.snapshot
    if session is None:
        return 1
    if session.is_empty:
        print("No products match these filters")
        return 0

    for product in session.items:
        print(f"{product.id}  {product.price:>9} {product.currency}  {product.title}")

    print(f"\n{len(session.items)} of {session.total_count} products, page {session.current_page}")
    if session.error:
        print(f"Error: {session.error_message} ({session.error})", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main(sys.argv[1:])))
