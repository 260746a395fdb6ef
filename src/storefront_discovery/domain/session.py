from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront_discovery.domain.product import Product, SearchRequest


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADING_MORE = "loadingMore"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DiscoverySession:
    """
    Snapshot of one result set as seen by the presentation layer.

    ``request`` is pinned to page 1; ``items`` only grows within a session.
    ``error`` holds the failure code of the last fetch while ``status`` is
    ``error`` and ``error_message`` the text to show next to the retry button.
    """

    request: SearchRequest
    items: tuple[Product, ...] = ()
    current_page: int = 1
    has_more: bool = False
    total_count: int = 0
    status: SessionStatus = SessionStatus.IDLE
    in_flight_token: int | None = None
    error: str | None = None
    error_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items and self.status is SessionStatus.IDLE
