"""
HTTP adapter for the backend discovery endpoint.

Failure mapping:
- Transport errors and timeouts → NetworkError
- 4xx responses and locally invalid requests → InvalidRequestError
- 5xx responses and unreadable bodies → ServerError
"""

from __future__ import annotations

import logging
from decimal import InvalidOperation

import httpx

from storefront_discovery.domain.errors import (
    InvalidRequestError,
    NetworkError,
    ServerError,
    ValidationError,
)
from storefront_discovery.domain.product import ResultPage, SearchRequest
from storefront_discovery.entrypoints.http.dtos.discovery_search import (
    DiscoverySearchResponseDTO,
)
from storefront_discovery.entrypoints.http.mappers.discovery_search_mapper import (
    DiscoverySearchMapper,
)
from storefront_discovery.infra.config import discovery_api_url, request_timeout_seconds
from storefront_discovery.ports.search_gateway import SearchGateway

logger = logging.getLogger(__name__)

SEARCH_PATH = "/v1/discovery/search"


class HttpSearchGateway(SearchGateway):
    def __init__(self, client: httpx.AsyncClient, path: str = SEARCH_PATH) -> None:
        """
        Initialize the gateway.

        Args:
            client: Async HTTP client with ``base_url`` pointing at the backend
            path: Path of the search endpoint relative to ``base_url``
        """
        self._client = client
        self._path = path

    @classmethod
    def from_env(cls) -> HttpSearchGateway:
        """Build a gateway from DISCOVERY_API_URL and DISCOVERY_TIMEOUT_SECONDS."""
        client = httpx.AsyncClient(
            base_url=discovery_api_url(),
            timeout=request_timeout_seconds(),
            headers={"Accept": "application/json"},
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search(self, request: SearchRequest) -> ResultPage:
        # Malformed requests never reach the network
        try:
            request.validate()
        except ValidationError as exc:
            raise InvalidRequestError(
                exc.message, page=request.page, fields=[e["field"] for e in exc.errors]
            ) from exc

        params = request.to_query_params()
        try:
            response = await self._client.get(self._path, params=params)
        except httpx.TimeoutException as exc:
            raise NetworkError("Discovery search timed out", page=request.page) from exc
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Discovery search failed: {exc.__class__.__name__}", page=request.page
            ) from exc

        if response.is_client_error:
            logger.info(
                "Discovery search rejected",
                extra={"status_code": response.status_code, "params": params},
            )
            raise InvalidRequestError(
                "Discovery search rejected the request",
                status_code=response.status_code,
                page=request.page,
            )
        if response.is_server_error:
            logger.warning(
                "Discovery search server error",
                extra={"status_code": response.status_code, "params": params},
            )
            raise ServerError(
                "Discovery search failed on the server",
                status_code=response.status_code,
                page=request.page,
            )

        try:
            dto = DiscoverySearchResponseDTO.model_validate(response.json())
            return DiscoverySearchMapper.to_result_page(dto)
        except (ValueError, InvalidOperation) as exc:
            # pydantic.ValidationError and JSONDecodeError are both ValueErrors
            logger.warning(
                "Unreadable discovery search response",
                extra={"status_code": response.status_code, "error": str(exc)},
            )
            raise ServerError(
                "Discovery search returned an unreadable response", page=request.page
            ) from exc
