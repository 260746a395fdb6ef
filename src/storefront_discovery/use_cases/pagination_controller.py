"""
Pagination state machine for one discovery result set at a time.

States: idle, loading (first page), loadingMore (next page), error.

Every fetch gets a fresh token from a monotonic counter and the session
remembers the token it is waiting for. A response whose token is not the
session's current one is discarded, so a filter change supersedes any
in-flight fetch without cancelling it. At most one fetch per session is
ever in flight: page N+1 is requested only once page N has resolved.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import replace

from storefront_discovery.domain.errors import NetworkError, SearchFailure
from storefront_discovery.domain.product import ResultPage, SearchRequest
from storefront_discovery.domain.session import DiscoverySession, SessionStatus
from storefront_discovery.ports.search_gateway import SearchGateway

logger = logging.getLogger(__name__)

SessionListener = Callable[[DiscoverySession], None]


class PaginationController:
    def __init__(self, gateway: SearchGateway) -> None:
        self._gateway = gateway
        self._tokens = itertools.count(1)
        self._session: DiscoverySession | None = None
        self._listeners: list[SessionListener] = []
        # (page, status) of the fetch that put the session into error
        self._failed: tuple[int, SessionStatus] | None = None

    @property
    def session(self) -> DiscoverySession | None:
        """Current immutable snapshot, or None before the first request."""
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every state change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self, request: SearchRequest) -> None:
        """
        Make ``request`` the current result set and fetch its first page.

        A request with the same base fields as the live session does not
        reset it; if that session is in error the failed fetch is retried.
        """
        base = request.base
        current = self._session
        if current is not None and current.request.same_result_set(request):
            if current.status is SessionStatus.ERROR:
                await self.retry()
            return

        token = next(self._tokens)
        self._session = DiscoverySession(
            request=base,
            current_page=1,
            status=SessionStatus.LOADING,
            in_flight_token=token,
        )
        self._failed = None
        logger.info(
            "Discovery session reset",
            extra={"request": base.to_query_params(), "token": token},
        )
        self._publish()
        await self._fetch(token, base, SessionStatus.LOADING)

    async def load_more(self) -> None:
        """
        Fetch the next page of the current session.

        Ignored unless the session is idle and the server reported more
        pages. In error, re-issues a failed next-page fetch.
        """
        session = self._session
        if session is None:
            return

        if session.status is SessionStatus.ERROR:
            if self._failed is not None and self._failed[1] is SessionStatus.LOADING_MORE:
                await self.retry()
            return

        if session.status is not SessionStatus.IDLE or not session.has_more:
            logger.debug(
                "Ignoring load-more signal",
                extra={"status": session.status.value, "has_more": session.has_more},
            )
            return

        await self._issue(session, session.current_page + 1, SessionStatus.LOADING_MORE)

    async def retry(self) -> None:
        """Re-issue the failed fetch with the session's pinned request."""
        session = self._session
        if session is None or session.status is not SessionStatus.ERROR or self._failed is None:
            return

        page, status = self._failed
        await self._issue(session, page, status)

    async def _issue(self, session: DiscoverySession, page: int, status: SessionStatus) -> None:
        token = next(self._tokens)
        self._session = replace(
            session,
            status=status,
            in_flight_token=token,
            error=None,
            error_message=None,
        )
        self._publish()
        await self._fetch(token, session.request.for_page(page), status)

    async def _fetch(self, token: int, request: SearchRequest, status: SessionStatus) -> None:
        try:
            result = await self._gateway.search(request)
        except SearchFailure as exc:
            self._fail(token, request, status, exc)
        except Exception as exc:
            logger.exception(
                "Unexpected discovery gateway error",
                extra={"page": request.page, "token": token},
            )
            self._fail(token, request, status, NetworkError(str(exc) or type(exc).__name__))
        else:
            self._succeed(token, request, status, result)

    def _is_current(self, token: int) -> bool:
        return self._session is not None and self._session.in_flight_token == token

    def _succeed(
        self,
        token: int,
        request: SearchRequest,
        status: SessionStatus,
        result: ResultPage,
    ) -> None:
        if not self._is_current(token):
            logger.debug(
                "Discarding stale discovery response",
                extra={"page": request.page, "token": token},
            )
            return

        session = self._session
        assert session is not None

        if result.page != request.page:
            logger.warning(
                "Discovery search answered a different page",
                extra={"requested_page": request.page, "returned_page": result.page},
            )

        if status is SessionStatus.LOADING:
            items = result.items
        else:
            items = session.items + result.items

        self._session = replace(
            session,
            items=items,
            current_page=request.page,
            has_more=result.has_more,
            total_count=result.total_count,
            status=SessionStatus.IDLE,
            in_flight_token=None,
            error=None,
            error_message=None,
        )
        self._failed = None
        self._publish()

    def _fail(
        self,
        token: int,
        request: SearchRequest,
        status: SessionStatus,
        failure: SearchFailure,
    ) -> None:
        if not self._is_current(token):
            logger.debug(
                "Discarding stale discovery failure",
                extra={"page": request.page, "token": token, "error_code": failure.error_code},
            )
            return

        session = self._session
        assert session is not None

        logger.warning(
            "Discovery fetch failed",
            extra={
                "page": request.page,
                "error_code": failure.error_code,
                "reason": failure.message,
            },
        )
        # Items from earlier pages and has_more stay as they were
        self._session = replace(
            session,
            status=SessionStatus.ERROR,
            in_flight_token=None,
            error=failure.error_code,
            error_message=failure.user_message,
        )
        self._failed = (request.page, status)
        self._publish()

    def _publish(self) -> None:
        session = self._session
        if session is None:
            return
        for listener in list(self._listeners):
            listener(session)
