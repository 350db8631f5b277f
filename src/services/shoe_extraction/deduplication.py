"""
Richness-preferring merge of shoe records.

``merge_shoe_results`` combines two observations of the same model field by
field. ``deduplicate_in_document`` folds all records of one article that share a
model key, and ``is_payload_richer`` answers the wholesale "should the candidate
replace the existing record" question used by the cross-run upsert gate.
"""

import logging
from dataclasses import fields, replace
from typing import Any, Dict, List, Optional, Tuple

from services.shoe_extraction import config
from services.shoe_extraction.models import ShoeInput

logger = logging.getLogger(__name__)

DOUBLE_WEIGHT_FIELDS = frozenset({"brand_name", "model", "weight", "drop", "price"})
GRAMS_BONUS = 2


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_grams_range(weight: Optional[float]) -> bool:
    return weight is not None and weight > config.GRAMS_THRESHOLD


def _merge_weight(existing: Optional[float], incoming: Optional[float]) -> Optional[float]:
    if existing is None:
        return incoming
    if incoming is None:
        return existing
    if is_grams_range(incoming) and not is_grams_range(existing):
        return incoming
    return existing


def _merge_value(existing: Any, incoming: Any) -> Any:
    if _is_empty(existing):
        return existing if _is_empty(incoming) else incoming
    if _is_empty(incoming):
        return existing
    if isinstance(existing, str) and isinstance(incoming, str):
        return incoming if len(incoming.strip()) > len(existing.strip()) else existing
    return existing


def merge_shoe_results(existing: ShoeInput, incoming: ShoeInput) -> ShoeInput:
    """Merge ``incoming`` into ``existing`` and return a new record; neither input is modified."""
    changes: Dict[str, Any] = {}
    for f in fields(ShoeInput):
        current = getattr(existing, f.name)
        other = getattr(incoming, f.name)
        if f.name == "weight":
            merged = _merge_weight(current, other)
        else:
            merged = _merge_value(current, other)
        if merged is not current:
            changes[f.name] = merged
    return replace(existing, **changes) if changes else existing


def richness_score(record: ShoeInput) -> int:
    score = 0
    for f in fields(ShoeInput):
        if _is_empty(getattr(record, f.name)):
            continue
        score += 2 if f.name in DOUBLE_WEIGHT_FIELDS else 1
    if is_grams_range(record.weight):
        score += GRAMS_BONUS
    return score


def is_payload_richer(candidate: ShoeInput, existing: ShoeInput) -> bool:
    return richness_score(candidate) > richness_score(existing)


def has_scalar_conflict(existing: ShoeInput, incoming: ShoeInput) -> bool:
    """True when both records carry different non-null numbers/booleans the merge cannot reconcile."""
    for f in fields(ShoeInput):
        current = getattr(existing, f.name)
        other = getattr(incoming, f.name)
        if _is_empty(current) or _is_empty(other) or isinstance(current, str):
            continue
        if f.name == "weight" and is_grams_range(current) != is_grams_range(other):
            continue
        if current != other:
            return True
    return False


def deduplicate_in_document(records: List[ShoeInput]) -> Tuple[List[ShoeInput], int]:
    """Fold records sharing a model key; returns the merged records and how many were folded away."""
    groups: Dict[str, ShoeInput] = {}
    folded = 0
    for record in records:
        if record.model_key in groups:
            groups[record.model_key] = merge_shoe_results(groups[record.model_key], record)
            folded += 1
        else:
            groups[record.model_key] = record
    if folded:
        logger.debug(f"Merged {folded} duplicate records into {len(groups)} models")
    return list(groups.values()), folded
