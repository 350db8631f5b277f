"""Ordered pattern tables for spec extraction.

Every table is a tuple of ``(pattern, setter)`` pairs evaluated in order; the
first match whose value passes the plausibility check wins. Setters turn a
regex match into a partial field mapping. Locale tables are keyed by language
so another language is a data addition to ``LOCALE_PATTERNS``.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

Setter = Callable[[re.Match], Dict[str, float]]
PatternTable = Tuple[Tuple[re.Pattern, Setter], ...]

OUNCES_TO_GRAMS = 28.35

NUM = r"(?<![\d.,])(\d{1,3}(?:[.,]\d{1,2})?)"
MM = r"[\s-]*(?:mm|millimet(?:er|re)s?)\b"
GRAMS = r"\s*(?:g|grams?|gramm)\b"
OUNCES = r"\s*(?:oz|ounces?)\b"


def to_float(raw: str) -> float:
    return float(raw.replace(",", "."))


def _compile(*pairs) -> PatternTable:
    return tuple((re.compile(p, re.IGNORECASE), setter) for p, setter in pairs)


def _grams(match: re.Match) -> Dict[str, float]:
    return {"weight": round(to_float(match.group(1)))}


def _grams_second(match: re.Match) -> Dict[str, float]:
    return {"weight": round(to_float(match.group(2)))}


def _ounces(match: re.Match) -> Dict[str, float]:
    return {"weight": round(to_float(match.group(1)) * OUNCES_TO_GRAMS)}


def _heel_forefoot(match: re.Match) -> Dict[str, float]:
    return {"heel_height": to_float(match.group(1)), "forefoot_height": to_float(match.group(2))}


def _forefoot_heel(match: re.Match) -> Dict[str, float]:
    return {"heel_height": to_float(match.group(2)), "forefoot_height": to_float(match.group(1))}


def _stack_range(match: re.Match) -> Dict[str, float]:
    first, second = to_float(match.group(1)), to_float(match.group(2))
    return {"heel_height": max(first, second), "forefoot_height": min(first, second)}


def _heel(match: re.Match) -> Dict[str, float]:
    return {"heel_height": to_float(match.group(1))}


def _forefoot(match: re.Match) -> Dict[str, float]:
    return {"forefoot_height": to_float(match.group(1))}


def _drop(match: re.Match) -> Dict[str, float]:
    return {"drop": to_float(match.group(1))}


def _zero_drop(match: re.Match) -> Dict[str, float]:
    return {"drop": 0.0}


@dataclass(frozen=True)
class LocalePatterns:
    weight: PatternTable
    stack_pairs: PatternTable
    heel: PatternTable
    forefoot: PatternTable
    drop: PatternTable


_EN_HEEL = r"(?:heel|rearfoot)"
_EN_FORE = r"(?:forefoot|toe)"
_EN_AT = r"(?:\s+(?:in|at|under)\s+(?:the\s+)?|\s+)"
_EN_LABEL = r"(?:\s+(?:stack|height))*\s*(?:[:=]|of|is)?\s*"

ENGLISH = LocalePatterns(
    weight=_compile(
        (r"\b(?:official(?:ly)?\s+weight(?:\s+is)?|weighed(?:\s+in)?(?:\s+at)?)[:\s]+(?:of\s+|just\s+|about\s+)?"
         + NUM + GRAMS, _grams),
        (r"\b(?:official(?:ly)?\s+weight(?:\s+is)?|weighed(?:\s+in)?(?:\s+at)?)[:\s]+(?:of\s+|just\s+|about\s+)?"
         + NUM + OUNCES, _ounces),
        (NUM + OUNCES + r"\s*\(\s*" + NUM + GRAMS, _grams_second),
        (r"\b(?:weight|weighs|weighing)[:\s]+(?:in\s+at\s+|of\s+|just\s+|only\s+|about\s+|around\s+)?"
         + NUM + GRAMS, _grams),
        (NUM + GRAMS, _grams),
        (r"\b(?:weight|weighs|weighing)[:\s]+(?:in\s+at\s+|of\s+|just\s+|only\s+|about\s+|around\s+)?"
         + NUM + OUNCES, _ounces),
        (NUM + OUNCES, _ounces),
    ),
    stack_pairs=_compile(
        (NUM + MM + _EN_AT + _EN_HEEL + r"\b[^0-9]{0,40}?" + NUM + MM + _EN_AT + _EN_FORE, _heel_forefoot),
        (NUM + MM + _EN_AT + _EN_FORE + r"\b[^0-9]{0,40}?" + NUM + MM + _EN_AT + _EN_HEEL, _forefoot_heel),
        (r"\b" + _EN_HEEL + _EN_LABEL + NUM + MM + r"[^0-9]{0,40}?" + _EN_FORE + _EN_LABEL + NUM + MM,
         _heel_forefoot),
        (r"\b" + _EN_FORE + _EN_LABEL + NUM + MM + r"[^0-9]{0,40}?" + _EN_HEEL + _EN_LABEL + NUM + MM,
         _forefoot_heel),
        (r"\bstack(?:\s+height)?\s*(?:[:=]|of|is)?\s*" + NUM + r"\s*(?:mm)?\s*(?:/|-|–|to)\s*" + NUM + MM,
         _stack_range),
    ),
    heel=_compile(
        (NUM + MM + _EN_AT + _EN_HEEL + r"\b", _heel),
        (r"\b" + _EN_HEEL + _EN_LABEL + NUM + MM, _heel),
    ),
    forefoot=_compile(
        (NUM + MM + _EN_AT + _EN_FORE + r"\b", _forefoot),
        (r"\b" + _EN_FORE + _EN_LABEL + NUM + MM, _forefoot),
    ),
    drop=_compile(
        (NUM + MM + r"[\s-]+(?:heel[\s-]+to[\s-]+toe\s+)?(?:drop|offset)\b", _drop),
        (r"\b(?:drop|offset)(?:\s+(?:is|of))?\s*[:=]?\s*(?:just\s+|only\s+|a\s+)?" + NUM + MM, _drop),
        (r"\bzero[\s-]drop\b", _zero_drop),
    ),
)

_DE_HEEL = r"(?:ferse|fersenh(?:ö|oe)he)"
_DE_FORE = r"(?:vorfu(?:ß|ss)|vorfu(?:ß|ss)h(?:ö|oe)he)"
_DE_AT = r"(?:\s+(?:in\s+der|an\s+der|am|im)\s+|\s+)"
_DE_LABEL = r"\s*[:=]?\s*"

GERMAN = LocalePatterns(
    weight=_compile(
        (r"\boffiziell(?:es)?\s+gewicht\s*[:=]?\s*(?:von\s+)?" + NUM + GRAMS, _grams),
        (r"\bgewicht\s*[:=]?\s*(?:von\s+|ca\.\s*|rund\s+)?" + NUM + GRAMS, _grams),
        (r"\bwiegt\s+(?:nur\s+|ca\.\s*|rund\s+)?" + NUM + GRAMS, _grams),
    ),
    stack_pairs=_compile(
        (NUM + MM + _DE_AT + _DE_HEEL + r"[^0-9]{0,40}?" + NUM + MM + _DE_AT + _DE_FORE, _heel_forefoot),
        (NUM + MM + _DE_AT + _DE_FORE + r"[^0-9]{0,40}?" + NUM + MM + _DE_AT + _DE_HEEL, _forefoot_heel),
        (r"\b" + _DE_HEEL + _DE_LABEL + NUM + MM + r"[^0-9]{0,40}?" + _DE_FORE + _DE_LABEL + NUM + MM,
         _heel_forefoot),
        (r"\b" + _DE_FORE + _DE_LABEL + NUM + MM + r"[^0-9]{0,40}?" + _DE_HEEL + _DE_LABEL + NUM + MM,
         _forefoot_heel),
    ),
    heel=_compile(
        (NUM + MM + _DE_AT + _DE_HEEL, _heel),
        (r"\b" + _DE_HEEL + _DE_LABEL + NUM + MM, _heel),
    ),
    forefoot=_compile(
        (NUM + MM + _DE_AT + _DE_FORE, _forefoot),
        (r"\b" + _DE_FORE + _DE_LABEL + NUM + MM, _forefoot),
    ),
    drop=_compile(
        (r"\bsprengung\s*(?:[:=]|von)?\s*" + NUM + MM, _drop),
        (NUM + MM + r"\s+sprengung\b", _drop),
    ),
)

LOCALE_PATTERNS = {
    "en": ENGLISH,
    "de": GERMAN,
}
LOCALE_ORDER = ("en", "de")

USD_RATES = {
    "USD": 1.0,
    "EUR": 1.08,
    "GBP": 1.26,
    "CAD": 0.74,
    "AUD": 0.67,
    "JPY": 0.0068,
    "CHF": 1.10,
    "SEK": 0.095,
    "NOK": 0.095,
    "DKK": 0.145,
    "PLN": 0.25,
}

CURRENCY_SYMBOLS = {"$": "USD", "US$": "USD", "€": "EUR", "£": "GBP", "¥": "JPY"}

_AMOUNT = r"(\d{2,4}(?:[.,]\d{2})?)"
_CODES = r"(USD|EUR|GBP|CAD|AUD|JPY|CHF|SEK|NOK|DKK|PLN)"

# Each entry yields (amount group, currency group or fixed code).
PRICE_PATTERNS = (
    (re.compile(r"(US\$|\$|€|£)\s?" + _AMOUNT), 2, 1),
    (re.compile(_AMOUNT + r"\s?(€|£)"), 1, 2),
    (re.compile(r"\b" + _CODES + r"\s?" + _AMOUNT, re.IGNORECASE), 2, 1),
    (re.compile(_AMOUNT + r"\s?" + _CODES + r"\b", re.IGNORECASE), 1, 2),
)
PLATFORM_CONTEXT = re.compile(r"platform", re.IGNORECASE)

SURFACE_PATTERNS = (
    (re.compile(r"\btrails?\b|\boff[\s-]road\b", re.IGNORECASE), "trail"),
    (re.compile(r"\broad\b|\bpavement\b|\basphalt\b", re.IGNORECASE), "road"),
)

CUSHIONING_PATTERNS = (
    (re.compile(r"\bmax(?:imal|imum)?[\s-]+cushion(?:ing|ed)?\b|\bplush\b|\bsuper[\s-]soft\b", re.IGNORECASE), "max"),
    (re.compile(r"\bfirm(?:er)?\s+(?:ride|feel|cushioning|midsole)\b", re.IGNORECASE), "firm"),
    (re.compile(r"\b(?:balanced|moderate)\s+(?:cushion(?:ing)?|ride|feel)\b", re.IGNORECASE), "balanced"),
)

FOOT_WIDTH_PATTERNS = (
    (re.compile(r"(?i:\b(?:extra[\s-])?wide\s+(?:fit|version|width|toe\s*box|feet|option)\b)|\b[24]E\b"), "wide"),
    (re.compile(r"\bnarrow\s+(?:fit|toe\s*box|width|feet|heel)\b", re.IGNORECASE), "narrow"),
    (re.compile(r"\b(?:standard|regular|medium|true[\s-]to[\s-]size)\s+(?:fit|width)\b", re.IGNORECASE), "standard"),
)

BREATHABILITY_PATTERNS = (
    (re.compile(r"\bnot\s+(?:very\s+)?breathable\b|\bpoor(?:ly)?\s+breath|\bruns\s+(?:hot|warm)\b|"
                r"\blimited\s+breathability\b", re.IGNORECASE), "low"),
    (re.compile(r"\b(?:moderate(?:ly)?|average|decent)\s+breathab", re.IGNORECASE), "medium"),
    (re.compile(r"\b(?:highly|very|super|extremely)\s+breathable\b|\b(?:excellent|great|good)\s+breathability\b|"
                r"\bbreathable\s+(?:engineered\s+)?mesh\b", re.IGNORECASE), "high"),
)

CARBON_PLATE_PATTERNS = (
    (re.compile(r"\b(?:no|without\s+(?:a\s+)?|non[\s-])carbon(?:[\s-]fib(?:er|re))?[\s-]plate|"
                r"\bnon[\s-]plated\b|\bplate[\s-]?less\b", re.IGNORECASE), False),
    (re.compile(r"\bcarbon(?:[\s-]fib(?:er|re))?(?:[\s-]infused)?[\s-]plated?\b|\bcarbon\s+(?:\w+\s+){0,2}plate\b",
                re.IGNORECASE), True),
)

WATERPROOF_PATTERNS = (
    (re.compile(r"\b(?:not|isn'?t|non)[\s-]*(?:waterproof|water[\s-]resistant)\b|"
                r"\bno\s+(?:waterproofing|gore[\s-]?tex|gtx)\b", re.IGNORECASE), False),
    (re.compile(r"\bwaterproof\b|\bgore[\s-]?tex\b|\bgtx\b|\bwater[\s-]resistant\b", re.IGNORECASE), True),
)

PRIMARY_USE_PATTERNS = (
    (re.compile(r"\brace[\s-]day\b|\bracing\b|\bracer\b|\brace\s+shoe\b", re.IGNORECASE), "race"),
    (re.compile(r"\btempo\s+(?:runs?|days?|work|shoe|trainer)\b|\bspeed\s*work\b|\bintervals\b", re.IGNORECASE), "tempo"),
    (re.compile(r"\bdaily\s+(?:trainer|training|miles|runs?)\b|\beveryday\s+(?:trainer|running)\b", re.IGNORECASE),
     "daily trainer"),
    (re.compile(r"\brecovery\s+(?:runs?|days?|shoe)\b|\beasy\s+(?:runs?|days?)\b", re.IGNORECASE), "recovery"),
    (re.compile(r"\btrail\s+running\b|\btrail\s+runs?\b", re.IGNORECASE), "trail running"),
)
