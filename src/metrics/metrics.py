from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from services.shoe_extraction.models import SPEC_FIELDS, ArticleExtraction, ReasonCode, ShoeInput


@dataclass
class RunSummary:
    articles_processed: int = 0
    articles_skipped: int = 0
    articles_failed: int = 0
    models_extracted: int = 0
    models_rejected: int = 0
    models_deduplicated: int = 0
    records_invalid: int = 0
    llm_fallbacks: int = 0
    records_created: int = 0
    records_updated: int = 0
    records_unchanged: int = 0
    rejections_by_reason: Counter = field(default_factory=Counter)
    methods: Counter = field(default_factory=Counter)
    coverage: Dict[str, float] = field(default_factory=dict)

    def record_extraction(self, extraction: ArticleExtraction) -> None:
        self.articles_processed += 1
        self.models_extracted += len(extraction.records)
        self.models_rejected += len(extraction.rejected)
        self.models_deduplicated += extraction.deduplicated
        self.records_invalid += extraction.invalid
        if extraction.used_llm:
            self.llm_fallbacks += 1
        self.methods[extraction.method] += 1
        for candidate in extraction.rejected:
            self.rejections_by_reason[candidate.reason.value] += 1

    def record_skip(self, reason: ReasonCode) -> None:
        self.articles_skipped += 1
        self.rejections_by_reason[reason.value] += 1

    def record_upsert(self, created: int, updated: int, unchanged: int) -> None:
        self.records_created += created
        self.records_updated += updated
        self.records_unchanged += unchanged

    def as_dict(self) -> Dict[str, Any]:
        return {
            "articles_processed": self.articles_processed,
            "articles_skipped": self.articles_skipped,
            "articles_failed": self.articles_failed,
            "models_extracted": self.models_extracted,
            "models_rejected": self.models_rejected,
            "models_deduplicated": self.models_deduplicated,
            "records_invalid": self.records_invalid,
            "llm_fallbacks": self.llm_fallbacks,
            "records_created": self.records_created,
            "records_updated": self.records_updated,
            "records_unchanged": self.records_unchanged,
            "rejections_by_reason": dict(self.rejections_by_reason),
            "methods": dict(self.methods),
            "field_coverage": dict(self.coverage),
        }


def field_coverage(records: Sequence[ShoeInput]) -> Dict[str, float]:
    """Share of records with each spec field filled, plus their mean under ``mean``."""
    if not records:
        return {}
    coverage = {
        name: round(sum(1 for r in records if getattr(r, name) is not None) / len(records), 4)
        for name in SPEC_FIELDS
    }
    coverage["mean"] = round(sum(coverage.values()) / len(SPEC_FIELDS), 4)
    return coverage
