import re

LIST_PATTERNS = [
    r'^\s*\d+[.\)]\s+',
    r'^\s*[-*•]\s+',
    r'^#{1,6}\s*',
    r'^\*{1,2}|\*{1,2}$',
]

COMPILED_LIST_PATTERNS = [re.compile(p) for p in LIST_PATTERNS]

# "Best Road Running Shoe:", "Runner-Up:", "Editor's Pick -" and similar award labels.
AWARD_LABEL_PATTERN = re.compile(
    r"^(?:[^:\n]{0,60}?\b(?:shoes?|winner|runner[\s-]up|pick|choice|selection|award|overall|upgrade|"
    r"value|budget|alternative)\b)\s*[:–—-]\s+",
    re.IGNORECASE,
)

HEADING_PRICE_PATTERN = re.compile(r"\s*\(([^()]*)\)\s*$")

SENTENCE_BREAK_PATTERN = re.compile(r"[.!?]\s|[.!?]$|,\s|;")

# Trailing words that end a capitalized model run in prose.
MODEL_STOPWORDS = frozenset({
    "The", "This", "That", "These", "It", "Its", "And", "Or", "But", "With", "In", "On",
    "At", "For", "From", "To", "Is", "Was", "Are", "A", "An", "As", "By", "Of", "If",
    "When", "While", "Review", "Reviews", "Test", "Running", "Shoe", "Shoes", "Vs", "VS",
})

INVALID_MODEL_WORDS = frozenset({
    "version", "model", "option", "design", "iteration", "offering", "lineup", "system",
    "technology", "innovation", "shoe", "shoes", "running", "trail", "road", "features",
    "offers", "provides", "delivers", "weighs", "measures", "boasts", "trainer",
})

ACTION_WORD_PATTERN = re.compile(
    r"\b(moved|enhanced|improved|updated|added|nailed|redesigned|developed|has|offers|provides|"
    r"delivers|features|weighs|measures|boasts|latest|newest|signature)\b",
    re.IGNORECASE,
)

GENERIC_TRAILING_PATTERNS = [
    re.compile(r"\s+(?:multi\s+)?tester$", re.IGNORECASE),
    re.compile(r"\s+\d+\s+miles?$", re.IGNORECASE),
    re.compile(r"\s+running$", re.IGNORECASE),
    re.compile(r"\s+review$", re.IGNORECASE),
    re.compile(r"\s+test$", re.IGNORECASE),
    re.compile(r"^running\s+", re.IGNORECASE),
]
