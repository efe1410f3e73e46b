"""Exchange-rate subsystem.

This package provides:
- RateCache: TTL cache with in-flight request coalescing
- FrankfurterClient: async HTTP client for latest, historical and trend rates
- RateService: cached lookups and currency conversion
- Currency flag metadata
"""

from formulary.rates.cache import RateCache, RateCacheEntry
from formulary.rates.client import FrankfurterClient, RateFetchError
from formulary.rates.currencies import CURRENCY_FLAGS, POPULAR_CURRENCIES, flag_url
from formulary.rates.models import ConversionQuote, HistoricalRates, LatestRates, RateTrend
from formulary.rates.service import RateService

__all__ = [
    "CURRENCY_FLAGS",
    "POPULAR_CURRENCIES",
    "ConversionQuote",
    "FrankfurterClient",
    "HistoricalRates",
    "LatestRates",
    "RateCache",
    "RateCacheEntry",
    "RateFetchError",
    "RateService",
    "RateTrend",
    "flag_url",
]
