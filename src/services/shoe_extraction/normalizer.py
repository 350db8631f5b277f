"""
Field normalization ("tightening") for extracted shoe specs.

Loose spec dicts coming from either extractor are canonicalized here: brand and
model strings are cleaned, free-typed values are coerced to strict types, drop is
derived from the stack heights, and the model key is built. ``tighten_input`` is
the only way a record becomes a ``ShoeInput``.
"""

import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from constants.known_brands import BRAND_ALIASES, KNOWN_BRANDS, SUB_BRAND_PREFIXES
from constants.text_patterns import GENERIC_TRAILING_PATTERNS
from services.shoe_extraction.models import ShoeInput
from services.shoe_extraction.text_utils import collapse_spaces, fold_text

logger = logging.getLogger(__name__)

_PARENTHETICAL = re.compile(r"\([^()]*\)")
_TRAILING_CLAUSE = re.compile(r"\s*[:\-–—]\s+.*$")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_DECIMAL_COMMA = re.compile(r",\d{1,2}$")

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d.%m.%Y", "%B %d, %Y", "%b %d, %Y", "%d %B %Y")

_KNOWN_BY_FOLD = {fold_text(b): b for b in KNOWN_BRANDS}

# Ordered keyword -> canonical value tables for the closed enumerations.
ENUM_KEYWORDS = {
    "surface_type": (
        (("trail", "off-road", "off road", "mountain"), "trail"),
        (("road", "pavement", "asphalt", "track", "street"), "road"),
    ),
    "cushioning_type": (
        (("max", "plush", "high", "soft"), "max"),
        (("firm", "responsive", "low", "minimal"), "firm"),
        (("balanced", "moderate", "medium", "mid"), "balanced"),
    ),
    "foot_width": (
        (("wide", "2e", "4e"), "wide"),
        (("narrow",), "narrow"),
        (("standard", "regular", "normal", "medium"), "standard"),
    ),
    "upper_breathability": (
        (("low", "poor"), "low"),
        (("medium", "moderate", "average"), "medium"),
        (("high", "excellent", "great"), "high"),
    ),
    "primary_use": (
        (("race", "racing", "competition"), "race"),
        (("tempo", "speed", "interval", "workout"), "tempo"),
        (("daily", "everyday", "training"), "daily trainer"),
        (("recovery", "easy"), "recovery"),
        (("trail",), "trail running"),
    ),
}

_TRUE_WORDS = frozenset({"true", "yes", "y", "1"})
_FALSE_WORDS = frozenset({"false", "no", "n", "0"})


def canonical_brand(brand: Optional[str]) -> str:
    """Map a brand spelling to its display form (ASICS -> Asics, On Running -> On)."""
    cleaned = collapse_spaces(brand or "")
    if not cleaned:
        return ""
    folded = fold_text(cleaned)
    alias = BRAND_ALIASES.get(cleaned.lower()) or BRAND_ALIASES.get(folded)
    if alias:
        return alias
    return _KNOWN_BY_FOLD.get(folded, cleaned)


def _brand_spellings(brand: str) -> list[str]:
    canonical = canonical_brand(brand)
    spellings = {brand, canonical}
    spellings.update(alias for alias, target in BRAND_ALIASES.items() if target == canonical)
    return sorted((s for s in spellings if s), key=lambda s: len(s.split()), reverse=True)


def _strip_leading_brand(brand: str, model: str) -> str:
    words = model.split()
    for spelling in _brand_spellings(brand):
        size = len(spelling.split())
        if len(words) >= size and fold_text(" ".join(words[:size])) == fold_text(spelling):
            return " ".join(words[size:])
    return model


def _refine_once(brand: str, model: str) -> str:
    refined = _PARENTHETICAL.sub(" ", model)
    refined = _TRAILING_CLAUSE.sub("", refined)
    refined = collapse_spaces(refined)
    refined = _strip_leading_brand(brand, refined)
    for pattern in GENERIC_TRAILING_PATTERNS:
        refined = pattern.sub("", refined)
    for prefix in SUB_BRAND_PREFIXES.get(fold_text(brand), ()):
        refined = re.sub(rf"^{re.escape(prefix)}\s+", "", refined, flags=re.IGNORECASE)
    return collapse_spaces(refined)


def refine_model_name(brand: Optional[str], model: Optional[str]) -> str:
    """Clean a model name; applying it to its own output changes nothing."""
    brand = brand or ""
    current = collapse_spaces(model or "")
    while True:
        refined = _refine_once(brand, current)
        if refined == current:
            return refined
        current = refined


def make_model_key(brand: Optional[str], model: Optional[str]) -> str:
    norm_brand = fold_text(brand or "")
    norm_model = fold_text(model or "")
    if not norm_brand or not norm_model:
        return ""
    return f"{norm_brand}::{norm_model}"


def to_num(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) or math.isinf(value) else float(value)
    text = str(value).strip()
    if "," in text and "." not in text and _DECIMAL_COMMA.search(text):
        text = text.replace(",", ".")
    text = _NON_NUMERIC.sub("", text)
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def to_bool_or_none(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
    return None


def to_iso_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = _parse_date_text(str(value).strip())
        if parsed is None:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat()


def _parse_date_text(text: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize_enum(field_name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    lowered = str(value).strip().lower()
    if not lowered:
        return None
    for keywords, canonical in ENUM_KEYWORDS[field_name]:
        if any(keyword in lowered for keyword in keywords):
            return canonical
    return None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v).strip() for v in value if str(v).strip())
    text = collapse_spaces(str(value))
    return text or None


def to_article_id(value: Any) -> Optional[int]:
    number = to_num(value)
    if number is None or number <= 0 or not number.is_integer():
        return None
    return int(number)


def _round2(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


def derive_drop(heel: Optional[float], forefoot: Optional[float], drop: Optional[float]) -> Optional[float]:
    """Explicit drop wins; otherwise heel minus forefoot when that is non-negative."""
    if drop is not None:
        return drop
    if heel is None or forefoot is None:
        return None
    derived = round(heel - forefoot, 2)
    return derived if derived >= 0 else None


def tighten_input(loose: Mapping[str, Any]) -> Optional[ShoeInput]:
    """Coerce a loose spec mapping into a ``ShoeInput`` or reject it with ``None``."""
    article_id = to_article_id(loose.get("article_id"))
    record_id = _to_str(loose.get("record_id"))
    brand = canonical_brand(_to_str(loose.get("brand_name")))
    model = refine_model_name(brand, _to_str(loose.get("model"))) if brand else ""

    supplied_key = _to_str(loose.get("model_key"))
    model_key = supplied_key if supplied_key and "::" in supplied_key else make_model_key(brand, model)

    if article_id is None or not record_id or not brand or not model or not model_key:
        logger.debug(
            f"Dropping record: article_id={loose.get('article_id')!r} record_id={record_id!r} "
            f"brand={brand!r} model={model!r}"
        )
        return None

    heel = _round2(to_num(loose.get("heel_height")))
    forefoot = _round2(to_num(loose.get("forefoot_height")))
    drop = derive_drop(heel, forefoot, _round2(to_num(loose.get("drop"))))

    return ShoeInput(
        article_id=article_id,
        record_id=record_id,
        brand_name=brand,
        model=model,
        model_key=model_key,
        date=to_iso_or_none(loose.get("date")),
        source_link=_to_str(loose.get("source_link")),
        heel_height=heel,
        forefoot_height=forefoot,
        drop=drop,
        weight=_round2(to_num(loose.get("weight"))),
        price=_round2(to_num(loose.get("price"))),
        upper_breathability=normalize_enum("upper_breathability", loose.get("upper_breathability")),
        carbon_plate=to_bool_or_none(loose.get("carbon_plate")),
        waterproof=to_bool_or_none(loose.get("waterproof")),
        primary_use=normalize_enum("primary_use", loose.get("primary_use")),
        cushioning_type=normalize_enum("cushioning_type", loose.get("cushioning_type")),
        surface_type=normalize_enum("surface_type", loose.get("surface_type")),
        foot_width=normalize_enum("foot_width", loose.get("foot_width")),
        additional_features=_to_str(loose.get("additional_features")),
    )
