"""
Running-shoe extraction: relevance filtering, heading detection, spec
extraction, normalization and intra-document merging.
"""

from services.shoe_extraction.deduplication import (
    deduplicate_in_document,
    is_payload_richer,
    merge_shoe_results,
)
from services.shoe_extraction.heading_detector import detect_candidates
from services.shoe_extraction.models import (
    Article,
    ArticleExtraction,
    CandidateHeading,
    MalformedInputError,
    ReasonCode,
    RejectedCandidate,
    ShoeInput,
)
from services.shoe_extraction.normalizer import make_model_key, refine_model_name, tighten_input
from services.shoe_extraction.orchestrator import extract_from_article
from services.shoe_extraction.relevance import classify, classify_article
from services.shoe_extraction.spec_extractor import RegexExtractor, extract_specs

__all__ = [
    "Article",
    "ArticleExtraction",
    "CandidateHeading",
    "MalformedInputError",
    "ReasonCode",
    "RejectedCandidate",
    "RegexExtractor",
    "ShoeInput",
    "classify",
    "classify_article",
    "deduplicate_in_document",
    "detect_candidates",
    "extract_from_article",
    "extract_specs",
    "is_payload_richer",
    "make_model_key",
    "merge_shoe_results",
    "refine_model_name",
    "tighten_input",
]
