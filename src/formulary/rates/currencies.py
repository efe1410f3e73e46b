"""Currency metadata: flag lookup and the popular-currency shortlist."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

FLAG_CDN_URL: Final[str] = "https://flagcdn.com/w40/{country}.png"

# Currency code -> ISO country (or region) code used for its flag.
# fmt: off
CURRENCY_FLAGS: Final[Mapping[str, str]] = MappingProxyType({
    "USD": "us", "EUR": "eu", "GBP": "gb", "JPY": "jp", "AUD": "au",
    "CAD": "ca", "CHF": "ch", "CNY": "cn", "SEK": "se", "NZD": "nz",
    "MXN": "mx", "SGD": "sg", "HKD": "hk", "NOK": "no", "KRW": "kr",
    "TRY": "tr", "RUB": "ru", "INR": "in", "BRL": "br", "ZAR": "za",
    "PHP": "ph", "CZK": "cz", "IDR": "id", "MYR": "my", "HUF": "hu",
    "ISK": "is", "HRK": "hr", "BGN": "bg", "RON": "ro", "DKK": "dk",
    "THB": "th", "PLN": "pl", "ILS": "il",
})

POPULAR_CURRENCIES: Final[tuple[str, ...]] = (
    "USD", "EUR", "GBP", "JPY", "AUD", "CAD", "CHF", "CNY", "INR", "BRL",
)
# fmt: on


def flag_url(code: str) -> str:
    """Flag image URL for a currency code.

    Unmapped codes fall back to their first two letters, which is the issuing
    country for most ISO 4217 codes.
    """
    code = code.strip().upper()
    country = CURRENCY_FLAGS.get(code, code[:2].lower())
    return FLAG_CDN_URL.format(country=country)
