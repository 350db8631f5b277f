import re

LISTICLE_PATTERN = re.compile(
    r"^(best|top|our (?:favorite|favourite)s?|roundup|buying guide|gift guide|right now|"
    r"top picks|editor(?:'|s|'s)? choice|what to buy)\b",
    re.IGNORECASE,
)

APPAREL_TERMS = (
    r"t-?shirt", r"tee", r"shirt", r"shorts?", r"tights?", r"bra", r"singlet", r"jersey",
    r"jacket", r"vest", r"pants", r"trousers", r"hoodie", r"socks?", r"gloves?",
    r"hat", r"beanie", r"cap", r"headband",
    r"belt", r"hydration", r"pack", r"backpack", r"poles?", r"watch", r"headlamp",
    r"gaiters?", r"nutrition", r"treadmill", r"strollers?", r"joggers?",
)
APPAREL_PATTERN = re.compile(r"\b(" + "|".join(APPAREL_TERMS) + r")\b", re.IGNORECASE)

NONSHOE_PATTERN = re.compile(r"\b(sandals?|slides?|slippers?|boots?)\b", re.IGNORECASE)

BAD_BRAND_PATTERN = re.compile(
    r"^(best|the|our|editor(?:'|s)?|guide|review|test|from|by|how|why|when|where|never|"
    r"stability|trail|running|shoes?|type|every|beginners?|stable|fun|delivers?|both|"
    r"good|great|right|\d+)$",
    re.IGNORECASE,
)

BAD_MODEL_PATTERN = re.compile(
    r"\b(shoes? for every type of runner|running shoes? for beginners?|"
    r"shoe that'?s stable and fun|delivers? both|for every type|type of runner|"
    r"for beginners?|stable and fun)\b",
    re.IGNORECASE,
)

MAX_BRAND_LENGTH = 25
MAX_MODEL_LENGTH = 50
MAX_MODEL_WORDS = 6

# Article titles about products that are never running shoes.
OFFTOPIC_TITLE_PATTERN = re.compile(
    r"\b(headphones?|earbuds?|watch(?:es)?|sunglasses|socks|shorts|tights|jackets?|"
    r"hydration (?:vests?|packs?)|sandals?|boots?|slippers?|massage guns?|treadmills?|"
    r"energy gels?|nutrition|sports bras?|strollers?|headlamps?)\b",
    re.IGNORECASE,
)
SHOE_TITLE_PATTERN = re.compile(r"\b(shoes?|sneakers?|trainers?|racers?|footwear)\b", re.IGNORECASE)

# Title analysis: what follows "Brand Model 4" when the article is about that one model.
TITLE_MODEL_WORD = r"[a-z][\w+-]*"
TITLE_NUMBERED_SUFFIX = r"(?:\s+(?:trail|road))?(?=\s+(?:review|test|hands-on|first look|vs\.?|comparison)\b|\s*[:!?.]?\s*$)"
TITLE_REVIEW_SUFFIX = r"(?=\s+(?:review|test|hands-on|first look)\b)"
TITLE_GENERIC_WORDS = re.compile(r"\b(running|shoes?|sneakers?|trainers?|models?|lineup|collection|gear)\b", re.IGNORECASE)
