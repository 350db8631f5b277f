"""Relevance checks that separate running-shoe candidates from listicle and apparel noise."""

import re
from typing import Optional

from constants.known_brands import CASE_SENSITIVE_BRANDS, KNOWN_BRANDS
from constants.relevance_terms import (
    APPAREL_PATTERN,
    BAD_BRAND_PATTERN,
    BAD_MODEL_PATTERN,
    LISTICLE_PATTERN,
    MAX_BRAND_LENGTH,
    MAX_MODEL_LENGTH,
    MAX_MODEL_WORDS,
    NONSHOE_PATTERN,
    OFFTOPIC_TITLE_PATTERN,
    SHOE_TITLE_PATTERN,
    TITLE_GENERIC_WORDS,
    TITLE_MODEL_WORD,
    TITLE_NUMBERED_SUFFIX,
    TITLE_REVIEW_SUFFIX,
)
from services.shoe_extraction.models import ReasonCode, RelevanceVerdict, TitleAnalysis, TitleScenario
from services.shoe_extraction.normalizer import canonical_brand
from services.shoe_extraction.text_utils import collapse_spaces, fold_text

ACCEPTED = RelevanceVerdict(ok=True)
GENERAL_TITLE = TitleAnalysis(scenario=TitleScenario.GENERAL)


def classify(
    title: Optional[str],
    model_key: Optional[str],
    model: Optional[str],
    brand: Optional[str],
) -> RelevanceVerdict:
    """Classify a candidate by its title/heading, key, model and brand.

    Checks run in a fixed order and the first failing check decides the reason.
    """
    title = (title or "").strip()
    model = (model or "").strip()
    brand = (brand or "").strip()
    hay = f"{title} {model_key or ''} {model}"

    if LISTICLE_PATTERN.match(title) or LISTICLE_PATTERN.match(model):
        return RelevanceVerdict(ok=False, reason=ReasonCode.LISTICLE)
    if APPAREL_PATTERN.search(hay):
        return RelevanceVerdict(ok=False, reason=ReasonCode.APPAREL)
    if NONSHOE_PATTERN.search(hay):
        return RelevanceVerdict(ok=False, reason=ReasonCode.NONSHOE)
    if brand and BAD_BRAND_PATTERN.match(brand):
        return RelevanceVerdict(ok=False, reason=ReasonCode.BADBRAND)
    if model and BAD_MODEL_PATTERN.search(model):
        return RelevanceVerdict(ok=False, reason=ReasonCode.BADMODEL)
    if len(brand) > MAX_BRAND_LENGTH:
        return RelevanceVerdict(ok=False, reason=ReasonCode.BADBRAND)
    if len(model) > MAX_MODEL_LENGTH:
        return RelevanceVerdict(ok=False, reason=ReasonCode.BADMODEL)
    if len(model.split()) > MAX_MODEL_WORDS:
        return RelevanceVerdict(ok=False, reason=ReasonCode.BADMODEL)
    return ACCEPTED


def classify_article(title: Optional[str]) -> RelevanceVerdict:
    """Reject whole articles whose title is about a product that is not a shoe."""
    title = title or ""
    if OFFTOPIC_TITLE_PATTERN.search(title) and not SHOE_TITLE_PATTERN.search(title):
        return RelevanceVerdict(ok=False, reason=ReasonCode.OFFTOPIC)
    return ACCEPTED


def _title_brand_pattern(brand: str) -> str:
    escaped = re.escape(brand).replace(r"\ ", r"\s+")
    if brand in CASE_SENSITIVE_BRANDS:
        escaped = f"(?-i:{escaped})"
    return rf"(?<![\w-]){escaped}(?![\w-])"


_TITLE_BRANDS = [(brand, _title_brand_pattern(brand)) for brand in KNOWN_BRANDS]


def _specific_model(title: str, brand_pattern: str) -> Optional[str]:
    numbered = re.compile(
        brand_pattern + rf"\s+(?P<model>{TITLE_MODEL_WORD}(?:\s+{TITLE_MODEL_WORD})?\s+\d+)" + TITLE_NUMBERED_SUFFIX,
        re.IGNORECASE,
    )
    named = re.compile(
        brand_pattern + rf"\s+(?P<model>{TITLE_MODEL_WORD}(?:\s+{TITLE_MODEL_WORD}){{1,2}})" + TITLE_REVIEW_SUFFIX,
        re.IGNORECASE,
    )
    for pattern in (numbered, named):
        match = pattern.search(title)
        if match and not TITLE_GENERIC_WORDS.search(match.group("model")):
            return match.group("model")
    return None


def _has_brand_focus(title: str, brand: str, brand_pattern: str) -> bool:
    focus = re.compile(
        rf"\b(?:\d+|best|top)\s+{brand_pattern}|{brand_pattern}\s+(?:running\s+)?(?:shoes?|sneakers?|trainers?)\b",
        re.IGNORECASE,
    )
    if focus.search(title):
        return True
    # A short brand at the start of a title is usually an ordinary word ("On the road").
    if brand in CASE_SENSITIVE_BRANDS:
        return False
    return re.match(brand_pattern, title, re.IGNORECASE) is not None


def analyze_title(title: Optional[str]) -> TitleAnalysis:
    """
    Decide whether a title is about one model, one brand, or shoes in general.

    Titles naming more than one brand (comparisons, roundups) are general.
    A single brand followed by a model name and a number, or by a model name
    and "review"/"test", makes the title specific. A single brand in a
    brand-focused phrase ("5 Nike Running Shoes", "Best Hoka Shoes") or at
    the start of the title makes it brand-only.
    """
    title = collapse_spaces(title or "")
    found = {}
    for brand, pattern in _TITLE_BRANDS:
        if re.search(pattern, title, re.IGNORECASE):
            found.setdefault(canonical_brand(brand), pattern)
    if len(found) != 1:
        return GENERAL_TITLE

    brand, pattern = next(iter(found.items()))
    model = _specific_model(title, pattern)
    if model:
        return TitleAnalysis(scenario=TitleScenario.SPECIFIC, brand=brand, model=model)
    if _has_brand_focus(title, brand, pattern):
        return TitleAnalysis(scenario=TitleScenario.BRAND_ONLY, brand=brand)
    return GENERAL_TITLE


def matches_title_analysis(brand: Optional[str], model: Optional[str], analysis: TitleAnalysis) -> bool:
    """True when a candidate fits what the article title says the article is about."""
    if analysis.scenario == TitleScenario.GENERAL:
        return True
    if fold_text(canonical_brand(brand)) != fold_text(analysis.brand):
        return False
    if analysis.scenario == TitleScenario.BRAND_ONLY:
        return True
    return fold_text(analysis.model) in fold_text(model or "")
