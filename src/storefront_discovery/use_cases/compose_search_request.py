"""
Query composition: URL parameters + filter state + sort → SearchRequest.

Precedence per field:
1. A value present in the URL (deep links win)
2. The value derived from the filter state
3. Omitted (unconstrained)

Malformed URL values are dropped, never coerced to zero. Prices the wire
cannot carry (finer than a cent) count as malformed. ``page`` is not
part of composition; the pagination controller owns it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront_discovery.domain.product import (
    DEFAULT_PAGE_SIZE,
    PRICE_CEILING,
    RATING_VALUES,
    FilterState,
    SearchRequest,
    SortOrder,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1"})
_FALSE_VALUES = frozenset({"false", "0"})


def _url_value(url_params: Mapping[str, str], key: str) -> str | None:
    value = url_params.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_amount(amount: Decimal | int | float | str) -> Decimal | None:
    """
    Return the price in the form the discovery endpoint accepts.

    Exponent notation and trailing zeros are folded away (``1e2`` → ``100``,
    ``50.100`` → ``50.1``). Anything negative, non-finite or finer than a
    cent cannot be carried and yields None.
    """
    if not isinstance(amount, Decimal):
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            return None
    if not amount.is_finite() or amount < 0:
        return None

    amount = amount.copy_abs().normalize()
    if amount.as_tuple().exponent < -2:
        return None
    return amount


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse a price from a URL value; None for anything the wire cannot carry."""
    if raw is None:
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return None
    return normalize_amount(amount)


def parse_rating(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        rating = int(raw)
    except ValueError:
        return None
    return rating if rating in RATING_VALUES else None


def parse_flag(raw: str | None) -> bool | None:
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True, slots=True)
class QueryComposer:
    """
    Deterministic, side-effect free composer of search requests.

    The same (url_params, filter_state, sort) always yields an equal, hashable
    SearchRequest pinned to page 1.
    """

    page_size: int = DEFAULT_PAGE_SIZE

    def compose(
        self,
        url_params: Mapping[str, str],
        filter_state: FilterState,
        sort: SortOrder | str | None = None,
    ) -> SearchRequest:
        options = filter_state.options
        defined = self._defined(url_params)

        min_from_url = "minPrice" in defined
        max_from_url = "maxPrice" in defined

        min_price = self._url_amount(url_params, "minPrice")
        if not min_from_url:
            low = normalize_amount(options.price_range[0])
            min_price = low if low is not None and low > 0 else None

        max_price = self._url_amount(url_params, "maxPrice")
        if not max_from_url:
            high = normalize_amount(options.price_range[1])
            max_price = high if high is not None and high < PRICE_CEILING else None

        if min_price is not None and max_price is not None and min_price > max_price:
            logger.debug(
                "Dropping inverted price bounds",
                extra={
                    "min_price": str(min_price),
                    "max_price": str(max_price),
                    "min_from_url": min_from_url,
                    "max_from_url": max_from_url,
                },
            )
            # An explicit URL bound beats the slider; same-source pairs both go
            if min_from_url == max_from_url:
                min_price = max_price = None
            elif min_from_url:
                max_price = None
            else:
                min_price = None

        if "rating" in defined:
            rating = parse_rating(_url_value(url_params, "rating"))
            if rating is None:
                logger.debug("Ignoring malformed rating in URL", extra={"field": "rating"})
        else:
            rating = options.rating if options.rating in RATING_VALUES else None
        if not rating:
            rating = None

        if "inStock" in defined:
            in_stock = parse_flag(_url_value(url_params, "inStock"))
        else:
            in_stock = options.in_stock

        return SearchRequest(
            q=_url_value(url_params, "q") or self._clean(filter_state.query),
            category=_url_value(url_params, "category") or options.primary_category,
            min_price=min_price,
            max_price=max_price,
            rating=rating,
            in_stock=True if in_stock else None,
            country=_url_value(url_params, "country") or self._clean(filter_state.country),
            sort=self._sort(url_params, sort),
            page=1,
            limit=self.page_size,
        )

    @staticmethod
    def _defined(url_params: Mapping[str, str]) -> set[str]:
        return {key for key in url_params if _url_value(url_params, key) is not None}

    @staticmethod
    def _url_amount(url_params: Mapping[str, str], key: str) -> Decimal | None:
        raw = _url_value(url_params, key)
        amount = parse_amount(raw)
        if raw is not None and amount is None:
            logger.debug("Ignoring malformed amount in URL", extra={"field": key, "raw": raw})
        return amount

    @staticmethod
    def _clean(value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @staticmethod
    def _sort(url_params: Mapping[str, str], sort: SortOrder | str | None) -> SortOrder:
        raw = _url_value(url_params, "sort")
        from_url = SortOrder.parse(raw)
        if raw is not None and from_url is None:
            logger.debug("Ignoring unknown sort in URL", extra={"raw": raw})
        if from_url is not None:
            return from_url
        if isinstance(sort, SortOrder):
            return sort
        return SortOrder.parse(sort) or SortOrder.TRENDING
