"""
Data models for shoe extraction.

This module contains the core data structures passed between the stages of the
extraction pipeline: the ingested article, candidate headings, normalized shoe
records and the per-article extraction result.
"""

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


class MalformedInputError(ValueError):
    """Raised when an article cannot be processed at all (e.g. non-string content)."""


class ReasonCode(str, enum.Enum):
    LISTICLE = "listicle"
    APPAREL = "apparel"
    NONSHOE = "nonshoe"
    BADBRAND = "badbrand"
    BADMODEL = "badmodel"
    NOSPECS = "nospecs"
    INVALID = "invalid"
    OFFTOPIC = "offtopic"
    OFFTITLE = "offtitle"


class DetectionStrategy(str, enum.Enum):
    STRUCTURED = "structured"
    UNSTRUCTURED = "unstructured"


class TitleScenario(str, enum.Enum):
    SPECIFIC = "specific"
    BRAND_ONLY = "brand-only"
    GENERAL = "general"


@dataclass(frozen=True)
class Article:
    article_id: Any
    record_id: str
    title: str
    content: Any
    date: Optional[str] = None
    source_link: Optional[str] = None
    source_position: Optional[str] = None


@dataclass(frozen=True)
class CandidateHeading:
    """A text span believed to introduce one shoe model."""
    brand_model: str
    brand: str
    model: str
    price: Optional[float]
    start_index: int
    end_index: int
    strategy: DetectionStrategy


@dataclass
class DetectionResult:
    strategy: DetectionStrategy
    candidates: List[CandidateHeading] = field(default_factory=list)


@dataclass(frozen=True)
class RelevanceVerdict:
    ok: bool
    reason: Optional[ReasonCode] = None


@dataclass(frozen=True)
class TitleAnalysis:
    """What an article title says it is about: one model, one brand, or anything."""
    scenario: TitleScenario
    brand: Optional[str] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class ShoeInput:
    article_id: int
    record_id: str
    brand_name: str
    model: str
    model_key: str
    date: Optional[str] = None
    source_link: Optional[str] = None
    heel_height: Optional[float] = None
    forefoot_height: Optional[float] = None
    drop: Optional[float] = None
    weight: Optional[float] = None
    price: Optional[float] = None
    upper_breathability: Optional[str] = None
    carbon_plate: Optional[bool] = None
    waterproof: Optional[bool] = None
    primary_use: Optional[str] = None
    cushioning_type: Optional[str] = None
    surface_type: Optional[str] = None
    foot_width: Optional[str] = None
    additional_features: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


IDENTITY_FIELDS = ("article_id", "record_id", "brand_name", "model", "model_key")
SPEC_FIELDS = tuple(
    f.name for f in fields(ShoeInput)
    if f.name not in IDENTITY_FIELDS and f.name not in ("date", "source_link")
)


@dataclass(frozen=True)
class RejectedCandidate:
    brand_name: Optional[str]
    model: Optional[str]
    model_key: Optional[str]
    reason: ReasonCode
    title: Optional[str] = None


@dataclass
class ExtractorOutput:
    """Loose spec dicts produced by one extractor for one article."""
    method: str
    specs: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ArticleExtraction:
    article_id: Any
    record_id: str
    method: str
    records: List[ShoeInput] = field(default_factory=list)
    rejected: List[RejectedCandidate] = field(default_factory=list)
    deduplicated: int = 0
    invalid: int = 0
    used_llm: bool = False
