"""
Candidate detection for shoe models inside article text.

Two strategies are tried in order. Structured detection looks for short heading
lines that start with a known brand ("Brooks Ghost 17 ($140)"). When an article
has too few such headings, unstructured detection scans the body for brand names
followed by capitalized model tokens.
"""

import logging
import re
from typing import List, Optional, Tuple

from constants.known_brands import CASE_SENSITIVE_BRANDS, KNOWN_BRANDS, KNOWN_SERIES, SERIES_PREFIXES
from constants.spec_patterns import CURRENCY_SYMBOLS, PRICE_PATTERNS, USD_RATES, to_float
from constants.text_patterns import (
    ACTION_WORD_PATTERN,
    AWARD_LABEL_PATTERN,
    HEADING_PRICE_PATTERN,
    INVALID_MODEL_WORDS,
    MODEL_STOPWORDS,
    SENTENCE_BREAK_PATTERN,
)
from services.shoe_extraction.config import (
    HEADING_MAX_LENGTH,
    MAX_HEADING_MODEL_WORDS,
    MAX_MODEL_TOKENS,
    MIN_STRUCTURED_HEADINGS,
)
from services.shoe_extraction.models import CandidateHeading, DetectionResult, DetectionStrategy
from services.shoe_extraction.text_utils import strip_markdown_line

logger = logging.getLogger(__name__)

MAX_MODEL_CHARS = 25

_BRANDS_LONGEST_FIRST = sorted(KNOWN_BRANDS, key=len, reverse=True)
_TOKEN = r"(?:[A-Z][\w+\-]*|\d[\w+\-]*)"


def _brand_regex(brand: str) -> str:
    escaped = re.escape(brand).replace(r"\ ", r"\s+")
    if brand in CASE_SENSITIVE_BRANDS:
        return escaped
    return f"(?i:{escaped})"


_BRAND_PREFIX_PATTERNS = [
    (brand, re.compile(rf"^{_brand_regex(brand)}(?![\w-])")) for brand in _BRANDS_LONGEST_FIRST
]

_MENTION_PATTERNS = [
    (
        brand,
        re.compile(
            rf"(?<![\w-]){_brand_regex(brand)}[ \t]+(?P<model>{_TOKEN}(?:[ \t]+{_TOKEN}){{0,{MAX_MODEL_TOKENS - 1}}})"
        ),
    )
    for brand in _BRANDS_LONGEST_FIRST
]


def match_brand_prefix(text: str) -> Optional[Tuple[str, int]]:
    """Return the known brand ``text`` starts with and where the brand ends."""
    for brand, pattern in _BRAND_PREFIX_PATTERNS:
        match = pattern.match(text)
        if match:
            return brand, match.end()
    return None


def is_valid_model_part(model: str) -> bool:
    if not model or len(model) < 2 or len(model) > MAX_MODEL_CHARS:
        return False
    lowered = model.lower()
    if lowered in INVALID_MODEL_WORDS or ACTION_WORD_PATTERN.search(model):
        return False
    if any(ch.isdigit() for ch in model):
        return True
    tokens = re.split(r"[\s\-]+", lowered)
    return any(t in KNOWN_SERIES or t.startswith(SERIES_PREFIXES) for t in tokens)


def _looks_like_heading_model(model: str) -> bool:
    if not model or not model[0].isalnum():
        return False
    if len(model.split()) > MAX_HEADING_MODEL_WORDS:
        return False
    if SENTENCE_BREAK_PATTERN.search(model) or ACTION_WORD_PATTERN.search(model):
        return False
    return any(ch.isupper() or ch.isdigit() for ch in model)


def _price_from_parens(inner: str) -> Optional[float]:
    for pattern, amount_group, currency_group in PRICE_PATTERNS:
        match = pattern.search(inner)
        if not match:
            continue
        token = match.group(currency_group)
        rate = USD_RATES.get(CURRENCY_SYMBOLS.get(token, token.upper()))
        if rate is not None:
            return round(to_float(match.group(amount_group)) * rate, 2)
    return None


def _parse_heading_line(line: str) -> Optional[Tuple[str, str, Optional[float]]]:
    text = strip_markdown_line(line)
    text = AWARD_LABEL_PATTERN.sub("", text, count=1).strip()
    price = None
    price_match = HEADING_PRICE_PATTERN.search(text)
    if price_match:
        price = _price_from_parens(price_match.group(1))
        text = text[:price_match.start()].strip()
    text = text.rstrip(" :-–—*").strip()

    brand_match = match_brand_prefix(text)
    if not brand_match:
        return None
    brand, brand_end = brand_match
    model = text[brand_end:].strip()
    if not _looks_like_heading_model(model):
        return None
    return brand, model, price


def detect_structured(content: str) -> List[CandidateHeading]:
    headings: List[CandidateHeading] = []
    offset = 0
    for line in content.splitlines(keepends=True):
        start = offset
        offset += len(line)
        stripped = line.strip()
        if not stripped or len(stripped) > HEADING_MAX_LENGTH:
            continue
        parsed = _parse_heading_line(stripped)
        if not parsed:
            continue
        brand, model, price = parsed
        headings.append(
            CandidateHeading(
                brand_model=f"{brand} {model}",
                brand=brand,
                model=model,
                price=price,
                start_index=start,
                end_index=start + len(line.rstrip("\r\n")),
                strategy=DetectionStrategy.STRUCTURED,
            )
        )
    return headings


def _trim_model_tokens(raw: str) -> str:
    kept = []
    for token in raw.split():
        if token in MODEL_STOPWORDS:
            break
        kept.append(token)
    return " ".join(kept)


def detect_unstructured(content: str) -> List[CandidateHeading]:
    found: List[CandidateHeading] = []
    for brand, pattern in _MENTION_PATTERNS:
        for match in pattern.finditer(content):
            model = _trim_model_tokens(match.group("model"))
            if not is_valid_model_part(model):
                continue
            model_start = match.start("model")
            found.append(
                CandidateHeading(
                    brand_model=f"{brand} {model}",
                    brand=brand,
                    model=model,
                    price=None,
                    start_index=match.start(),
                    end_index=model_start + len(model),
                    strategy=DetectionStrategy.UNSTRUCTURED,
                )
            )

    found.sort(key=lambda c: (c.start_index, -(c.end_index - c.start_index)))
    # Repeats are kept: each mention bounds the window of the one before it.
    mentions: List[CandidateHeading] = []
    last_end = -1
    for candidate in found:
        if candidate.start_index < last_end:
            continue
        last_end = candidate.end_index
        mentions.append(candidate)
    return mentions


def detect_candidates(content: str) -> DetectionResult:
    """Run structured detection, falling back to unstructured mentions when headings are scarce."""
    structured = detect_structured(content)
    if len(structured) >= MIN_STRUCTURED_HEADINGS:
        return DetectionResult(strategy=DetectionStrategy.STRUCTURED, candidates=structured)
    mentions = detect_unstructured(content)
    logger.debug(f"Found {len(structured)} structured headings, using {len(mentions)} unstructured mentions")
    return DetectionResult(strategy=DetectionStrategy.UNSTRUCTURED, candidates=mentions)
