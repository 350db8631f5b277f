"""
Text utility functions for shoe extraction.

This module contains helpers for string normalization, markdown cleanup and
lenient JSON parsing of LLM responses.
"""

import json
import re
import unicodedata

from constants.text_patterns import COMPILED_LIST_PATTERNS

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


def fold_text(text: str) -> str:
    """Lowercase, strip diacritics and collapse non-alphanumeric runs to single spaces."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub(" ", stripped.lower()).strip()


def collapse_spaces(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def strip_markdown_line(line: str) -> str:
    """Remove list numbering, bullets, heading hashes and bold markers from one line."""
    cleaned = line.strip()
    previous = None
    while cleaned != previous:
        previous = cleaned
        for pattern in COMPILED_LIST_PATTERNS:
            cleaned = pattern.sub("", cleaned).strip()
    return cleaned


def _parse_json_response(response: str) -> dict | None:
    """Parse a JSON object from an LLM response."""
    response = response.strip()

    if response.startswith("```json"):
        response = response[7:]
    if response.startswith("```"):
        response = response[3:]
    if response.endswith("```"):
        response = response[:-3]
    response = response.strip()

    parsed = None
    try:
        parsed = json.loads(response)
    except json.JSONDecodeError:
        json_match = re.search(r'\{.*\}', response, re.DOTALL)
        if json_match:
            try:
                parsed = json.loads(json_match.group(0))
            except json.JSONDecodeError:
                pass

    if isinstance(parsed, list):
        return {"items": parsed}
    return parsed if isinstance(parsed, dict) else None
