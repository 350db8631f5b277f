from constants.known_brands import (
    BRAND_ALIASES,
    CASE_SENSITIVE_BRANDS,
    KNOWN_BRANDS,
    KNOWN_SERIES,
    SERIES_PREFIXES,
    SUB_BRAND_PREFIXES,
)
from constants.spec_patterns import LOCALE_ORDER, LOCALE_PATTERNS, USD_RATES

__all__ = [
    "BRAND_ALIASES",
    "CASE_SENSITIVE_BRANDS",
    "KNOWN_BRANDS",
    "KNOWN_SERIES",
    "SERIES_PREFIXES",
    "SUB_BRAND_PREFIXES",
    "LOCALE_ORDER",
    "LOCALE_PATTERNS",
    "USD_RATES",
]
