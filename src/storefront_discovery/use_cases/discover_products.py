"""
Discovery engine facade.

Single owner of the discovery inputs (URL parameters, filter state, sort).
Every writer goes through this object; each edit recomposes the
SearchRequest and hands it to the pagination controller, which resets the
session only when the result set actually changed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace

from storefront_discovery.domain.product import FilterOptions, FilterState, SearchRequest, SortOrder
from storefront_discovery.domain.session import DiscoverySession, SessionStatus
from storefront_discovery.ports.search_gateway import SearchGateway
from storefront_discovery.use_cases.compose_search_request import QueryComposer
from storefront_discovery.use_cases.pagination_controller import (
    PaginationController,
    SessionListener,
)
from storefront_discovery.use_cases.scroll_continuation import (
    DEFAULT_LEAD_DISTANCE,
    ScrollContinuation,
)

logger = logging.getLogger(__name__)


class DiscoveryEngine:
    def __init__(
        self,
        gateway: SearchGateway,
        composer: QueryComposer | None = None,
        lead_distance: float = DEFAULT_LEAD_DISTANCE,
    ) -> None:
        self._composer = composer or QueryComposer()
        self._controller = PaginationController(gateway)
        self._continuation = ScrollContinuation(self._signal_load_more, lead_distance)
        self._url_params: dict[str, str] = {}
        self._filter_state = FilterState()
        self._sort: SortOrder | None = None
        self._tasks: set[asyncio.Task[None]] = set()

        self._controller.subscribe(self._rearm_when_settled)

    @property
    def controller(self) -> PaginationController:
        return self._controller

    @property
    def continuation(self) -> ScrollContinuation:
        return self._continuation

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def snapshot(self) -> DiscoverySession | None:
        return self._controller.session

    @property
    def request(self) -> SearchRequest:
        """The request the current inputs compose to (page 1)."""
        return self._composer.compose(self._url_params, self._filter_state, self._sort)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        return self._controller.subscribe(listener)

    async def mount(self, url_params: Mapping[str, str] | None = None) -> None:
        self._url_params = dict(url_params or {})
        await self._recompose()

    async def set_url_params(self, url_params: Mapping[str, str]) -> None:
        self._url_params = dict(url_params)
        await self._recompose()

    async def set_filters(self, options: FilterOptions) -> None:
        self._filter_state = replace(self._filter_state, options=options)
        await self._recompose()

    async def set_query(self, query: str | None) -> None:
        self._filter_state = replace(self._filter_state, query=query)
        await self._recompose()

    async def set_country(self, country: str | None) -> None:
        self._filter_state = replace(self._filter_state, country=country)
        await self._recompose()

    async def set_sort(self, sort: SortOrder | str) -> None:
        parsed = sort if isinstance(sort, SortOrder) else SortOrder.parse(sort)
        if parsed is None:
            logger.debug("Ignoring unknown sort order", extra={"sort": sort})
            return
        self._sort = parsed
        await self._recompose()

    async def load_more(self) -> None:
        await self._controller.load_more()

    async def retry(self) -> None:
        await self._controller.retry()

    def on_sentinel(self, sentinel_top: float, viewport_bottom: float) -> bool:
        """
        Feed sentinel geometry from the scroll handler; True if a fetch was scheduled.

        Must be called from inside the running event loop, which runs the
        scheduled fetch. Outside one this raises RuntimeError before the
        continuation changes state.
        """
        self._require_loop()
        return self._continuation.observe_geometry(sentinel_top, viewport_bottom)

    def on_intersection(self, is_intersecting: bool) -> bool:
        self._require_loop()
        return self._continuation.observe(is_intersecting)

    async def aclose(self) -> None:
        """Wait for fetches scheduled by scroll signals."""
        self._continuation.detach()
        if self._tasks:
            await asyncio.gather(*self._tasks)

    async def _recompose(self) -> None:
        await self._controller.start(self.request)

    def _signal_load_more(self) -> None:
        task = asyncio.get_running_loop().create_task(self._controller.load_more())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _rearm_when_settled(self, session: DiscoverySession) -> None:
        if session.status is SessionStatus.IDLE and session.has_more:
            self._continuation.rearm()

    @staticmethod
    def _require_loop() -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RuntimeError("Scroll signals must be fed from the running event loop") from exc
