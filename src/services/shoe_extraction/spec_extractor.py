"""
Regex-based spec extraction.

For each detected candidate a text window is cut from the article, and the
ordered pattern tables from ``constants.spec_patterns`` are evaluated against it.
The first plausible match per field wins; a miss leaves the field ``None``.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from constants.spec_patterns import (
    BREATHABILITY_PATTERNS,
    CARBON_PLATE_PATTERNS,
    CURRENCY_SYMBOLS,
    CUSHIONING_PATTERNS,
    FOOT_WIDTH_PATTERNS,
    LOCALE_ORDER,
    LOCALE_PATTERNS,
    PLATFORM_CONTEXT,
    PRICE_PATTERNS,
    PRIMARY_USE_PATTERNS,
    SURFACE_PATTERNS,
    USD_RATES,
    WATERPROOF_PATTERNS,
    to_float,
)
from services.shoe_extraction.config import (
    BLOCK_MAX_CHARS,
    MAX_DROP_MM,
    MAX_PRICE_USD,
    MAX_STACK_MM,
    MAX_WEIGHT_GRAMS,
    MENTION_WINDOW_RADIUS,
    MIN_DROP_MM,
    MIN_PRICE_USD,
    MIN_STACK_MM,
    MIN_WEIGHT_GRAMS,
)
from services.shoe_extraction.heading_detector import detect_candidates
from services.shoe_extraction.models import (
    Article,
    CandidateHeading,
    DetectionStrategy,
    ExtractorOutput,
    MalformedInputError,
)
from services.shoe_extraction.normalizer import derive_drop

logger = logging.getLogger(__name__)

PLATFORM_LOOKBEHIND = 40


def _in_range(value: Optional[float], low: float, high: float) -> bool:
    return value is not None and low <= value <= high


def _first_value(table_name: str, field: str, low: float, high: float, window: str) -> Optional[float]:
    for locale in LOCALE_ORDER:
        for pattern, setter in getattr(LOCALE_PATTERNS[locale], table_name):
            for match in pattern.finditer(window):
                value = setter(match)[field]
                if _in_range(value, low, high):
                    return value
    return None


def _first_height(table, field: str, window: str) -> Optional[float]:
    for pattern, setter in table:
        for match in pattern.finditer(window):
            value = setter(match)[field]
            if _in_range(value, MIN_STACK_MM, MAX_STACK_MM):
                return value
    return None


def extract_weight(window: str) -> Optional[float]:
    return _first_value("weight", "weight", MIN_WEIGHT_GRAMS, MAX_WEIGHT_GRAMS, window)


def extract_heights(window: str) -> Tuple[Optional[float], Optional[float]]:
    """Return (heel, forefoot); paired mentions beat single ones, English beats other locales."""
    for locale in LOCALE_ORDER:
        patterns = LOCALE_PATTERNS[locale]
        for pattern, setter in patterns.stack_pairs:
            for match in pattern.finditer(window):
                values = setter(match)
                heel, forefoot = values["heel_height"], values["forefoot_height"]
                if _in_range(heel, MIN_STACK_MM, MAX_STACK_MM) and _in_range(forefoot, MIN_STACK_MM, MAX_STACK_MM):
                    return heel, forefoot
        heel = _first_height(patterns.heel, "heel_height", window)
        forefoot = _first_height(patterns.forefoot, "forefoot_height", window)
        if heel is not None or forefoot is not None:
            return heel, forefoot
    return None, None


def extract_drop(window: str) -> Optional[float]:
    return _first_value("drop", "drop", MIN_DROP_MM, MAX_DROP_MM, window)


def extract_price(window: str) -> Optional[float]:
    """First plausible currency-marked price in the window, converted to USD."""
    found = []
    for pattern, amount_group, currency_group in PRICE_PATTERNS:
        for match in pattern.finditer(window):
            found.append((match.start(), match, amount_group, currency_group))
    for start, match, amount_group, currency_group in sorted(found, key=lambda item: item[0]):
        if PLATFORM_CONTEXT.search(window[max(0, start - PLATFORM_LOOKBEHIND):start]):
            continue
        token = match.group(currency_group)
        currency = CURRENCY_SYMBOLS.get(token, token.upper())
        rate = USD_RATES.get(currency)
        if rate is None:
            continue
        usd = round(to_float(match.group(amount_group)) * rate, 2)
        if _in_range(usd, MIN_PRICE_USD, MAX_PRICE_USD):
            return usd
    return None


def _first_label(table, window: str) -> Any:
    for pattern, value in table:
        if pattern.search(window):
            return value
    return None


def extract_specs(window: str) -> Dict[str, Any]:
    heel, forefoot = extract_heights(window)
    return {
        "weight": extract_weight(window),
        "heel_height": heel,
        "forefoot_height": forefoot,
        "drop": derive_drop(heel, forefoot, extract_drop(window)),
        "price": extract_price(window),
        "surface_type": _first_label(SURFACE_PATTERNS, window),
        "cushioning_type": _first_label(CUSHIONING_PATTERNS, window),
        "foot_width": _first_label(FOOT_WIDTH_PATTERNS, window),
        "upper_breathability": _first_label(BREATHABILITY_PATTERNS, window),
        "carbon_plate": _first_label(CARBON_PLATE_PATTERNS, window),
        "waterproof": _first_label(WATERPROOF_PATTERNS, window),
        "primary_use": _first_label(PRIMARY_USE_PATTERNS, window),
    }


def candidate_windows(content: str, candidates: List[CandidateHeading]) -> Iterator[Tuple[CandidateHeading, str]]:
    """Yield each candidate with its text window, clipped at the next candidate."""
    ordered = sorted(candidates, key=lambda c: c.start_index)
    for index, candidate in enumerate(ordered):
        next_start = ordered[index + 1].start_index if index + 1 < len(ordered) else len(content)
        reach = BLOCK_MAX_CHARS if candidate.strategy == DetectionStrategy.STRUCTURED else MENTION_WINDOW_RADIUS
        end = min(next_start, candidate.end_index + reach)
        yield candidate, content[candidate.start_index:end]


def require_text(content: Any) -> str:
    if not isinstance(content, str):
        raise MalformedInputError(f"Article content must be a string, got {type(content).__name__}")
    return content


class RegexExtractor:
    """Heading/mention detection plus pattern tables."""

    method = "regex"

    def extract(self, article: Article) -> ExtractorOutput:
        content = require_text(article.content)
        detection = detect_candidates(content)
        specs = []
        for candidate, window in candidate_windows(content, detection.candidates):
            fields = extract_specs(window)
            if _in_range(candidate.price, MIN_PRICE_USD, MAX_PRICE_USD):
                fields["price"] = candidate.price
            specs.append({
                "brand_name": candidate.brand,
                "model": candidate.model,
                "heading": candidate.brand_model,
                **fields,
            })
        return ExtractorOutput(method=detection.strategy.value, specs=specs)
