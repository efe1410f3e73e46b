"""Cached exchange-rate lookups and currency conversion.

Every lookup goes through RateCache and returns None when rates are
temporarily unavailable; callers keep their previous figures in that case.
Latest rates expire after the cache TTL. Historical and trend data describe
closed past periods and by default never expire.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from collections.abc import Iterable

from formulary.config import FormularyConfig
from formulary.rates.cache import RateCache
from formulary.rates.client import FrankfurterClient
from formulary.rates.models import ConversionQuote, HistoricalRates, LatestRates, RateTrend

logger = logging.getLogger(__name__)


def latest_key(base: str, amount: float) -> str:
    return f"latest-{base.upper()}-{amount:g}"


def historical_key(date: dt.date | str, base: str, target: str, amount: float) -> str:
    return f"hist-{date}-{base.upper()}-{target.upper()}-{amount:g}"


def trend_key(start: dt.date | str, end: dt.date | str, base: str, target: str) -> str:
    return f"trend-{start}-{end}-{base.upper()}-{target.upper()}"


class RateService:
    """Currency rates backed by a FrankfurterClient and a RateCache."""

    def __init__(
        self,
        client: FrankfurterClient | None = None,
        cache: RateCache | None = None,
        *,
        historical_ttl_seconds: float = math.inf,
    ) -> None:
        self._client = client or FrankfurterClient()
        self._cache = cache or RateCache()
        self._historical_ttl_seconds = historical_ttl_seconds

    @classmethod
    def from_config(cls, config: FormularyConfig) -> RateService:
        """Build a service whose client and cache follow the given config."""
        client = FrankfurterClient(
            base_url=config.rate_base_url,
            timeout=config.rate_timeout_seconds,
            max_retries=config.rate_max_retries,
        )
        return cls(client, RateCache(ttl_seconds=config.rate_cache_ttl_seconds))

    @property
    def cache(self) -> RateCache:
        return self._cache

    async def latest_rates(self, base: str, amount: float = 1) -> LatestRates | None:
        async def fetch() -> LatestRates:
            return LatestRates.model_validate(await self._client.fetch_latest(base, amount))

        result: LatestRates | None = await self._cache.get_or_fetch(
            latest_key(base, amount), fetch
        )
        return result

    async def historical_rate(
        self, date: dt.date | str, base: str, target: str, amount: float = 1
    ) -> HistoricalRates | None:
        async def fetch() -> HistoricalRates:
            data = await self._client.fetch_historical(date, base, target, amount)
            return HistoricalRates.model_validate(data)

        result: HistoricalRates | None = await self._cache.get_or_fetch(
            historical_key(date, base, target, amount),
            fetch,
            ttl_seconds=self._historical_ttl_seconds,
        )
        return result

    async def rate_trend(
        self, start: dt.date | str, end: dt.date | str, base: str, target: str
    ) -> RateTrend | None:
        async def fetch() -> RateTrend:
            return RateTrend.model_validate(
                await self._client.fetch_trend(start, end, base, target)
            )

        result: RateTrend | None = await self._cache.get_or_fetch(
            trend_key(start, end, base, target),
            fetch,
            ttl_seconds=self._historical_ttl_seconds,
        )
        return result

    async def convert(self, amount: float, base: str, target: str) -> ConversionQuote | None:
        """Convert `amount` of base into target at the latest rate.

        Same-currency conversion is answered locally at rate 1.
        """
        base, target = base.upper(), target.upper()
        if base == target:
            return ConversionQuote(
                amount=amount, base=base, target=target, rate=1.0, converted=amount
            )
        quotes = await self.convert_many(amount, base, [target])
        return quotes[target]

    async def convert_many(
        self, amount: float, base: str, targets: Iterable[str]
    ) -> dict[str, ConversionQuote | None]:
        """Convert `amount` of base into several targets with one rate lookup.

        Targets missing from the published rates map to None, as do all
        targets when rates are unavailable.
        """
        base = base.upper()
        codes = [code.upper() for code in targets]
        quotes: dict[str, ConversionQuote | None] = {}
        latest = None
        if any(code != base for code in codes):
            latest = await self.latest_rates(base)

        for code in codes:
            if code == base:
                quotes[code] = ConversionQuote(
                    amount=amount, base=base, target=code, rate=1.0, converted=amount
                )
                continue
            rate = latest.rate_for(code) if latest is not None else None
            if rate is None:
                logger.debug("No %s->%s rate available", base, code)
                quotes[code] = None
                continue
            quotes[code] = ConversionQuote(
                amount=amount,
                base=base,
                target=code,
                rate=rate,
                converted=amount * rate,
                date=latest.date if latest is not None else None,
            )
        return quotes
