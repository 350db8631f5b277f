"""
Configuration and constants for shoe extraction.

Thresholds that tune detection and merging are read from the environment so a
deployment can override them without a code change.
"""

import os

# Values above this are treated as grams, at or below it as unconverted ounces.
GRAMS_THRESHOLD = float(os.getenv("GRAMS_THRESHOLD", "50"))

# Fewer structured headings than this switches detection to unstructured mentions.
MIN_STRUCTURED_HEADINGS = int(os.getenv("MIN_STRUCTURED_HEADINGS", "1"))

HEADING_MAX_LENGTH = int(os.getenv("HEADING_MAX_LENGTH", "80"))
BLOCK_MAX_CHARS = int(os.getenv("BLOCK_MAX_CHARS", "1500"))
MENTION_WINDOW_RADIUS = int(os.getenv("MENTION_WINDOW_RADIUS", "300"))
MAX_MODEL_TOKENS = 4
MAX_HEADING_MODEL_WORDS = 6

# Plausibility bounds
MIN_WEIGHT_GRAMS = 100
MAX_WEIGHT_GRAMS = 600
MIN_STACK_MM = 10
MAX_STACK_MM = 60
MIN_DROP_MM = 0
MAX_DROP_MM = 20
MIN_PRICE_USD = 40
MAX_PRICE_USD = 500
OUNCE_CEILING = 20
