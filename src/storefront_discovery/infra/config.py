from __future__ import annotations

import os

from storefront_discovery.domain.product import DEFAULT_PAGE_SIZE


def discovery_api_url() -> str:
    url = os.getenv("DISCOVERY_API_URL")

    if not url:
        raise RuntimeError("DISCOVERY_API_URL environment variable is not set")

    return url.rstrip("/")


def request_timeout_seconds() -> float:
    raw = os.getenv("DISCOVERY_TIMEOUT_SECONDS")
    if not raw:
        return 10.0

    timeout = float(raw)
    if timeout <= 0:
        raise RuntimeError("DISCOVERY_TIMEOUT_SECONDS must be positive")
    return timeout


def page_size() -> int:
    raw = os.getenv("DISCOVERY_PAGE_SIZE")
    if not raw:
        return DEFAULT_PAGE_SIZE

    size = int(raw)
    if size <= 0:
        raise RuntimeError("DISCOVERY_PAGE_SIZE must be positive")
    return size
