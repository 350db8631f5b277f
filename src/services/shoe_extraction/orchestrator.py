"""
Per-article extraction pipeline.

Regex extraction runs first. Its loose specs pass the relevance filter, the
article-title filter, a "has at least one spec" check and the tightening gate.
Only when nothing survives does the LLM extractor get a turn, and its output
passes the same gates. Surviving records are merged per model key before
being returned.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

from services.shoe_extraction.deduplication import deduplicate_in_document
from services.shoe_extraction.models import (
    SPEC_FIELDS,
    Article,
    ArticleExtraction,
    ExtractorOutput,
    ReasonCode,
    RejectedCandidate,
    ShoeInput,
    TitleAnalysis,
    TitleScenario,
)
from services.shoe_extraction.normalizer import (
    canonical_brand,
    make_model_key,
    refine_model_name,
    tighten_input,
    to_article_id,
)
from services.shoe_extraction.relevance import analyze_title, classify, matches_title_analysis
from services.shoe_extraction.spec_extractor import RegexExtractor

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    method: str

    def extract(self, article: Article) -> ExtractorOutput:
        ...


def has_specs(spec: Dict[str, Any]) -> bool:
    return any(spec.get(name) is not None for name in SPEC_FIELDS)


def _gate_specs(
    article: Article, specs: List[Dict[str, Any]], title_analysis: TitleAnalysis
) -> Tuple[List[ShoeInput], List[RejectedCandidate], int]:
    records: List[ShoeInput] = []
    rejected: List[RejectedCandidate] = []
    invalid = 0
    for spec in specs:
        brand = canonical_brand(spec.get("brand_name"))
        model = refine_model_name(brand, spec.get("model"))
        model_key = make_model_key(brand, model)
        heading = spec.get("heading")

        verdict = classify(heading, model_key, model, brand)
        reason = verdict.reason
        if verdict.ok and not matches_title_analysis(brand, model, title_analysis):
            reason = ReasonCode.OFFTITLE
        elif verdict.ok and not has_specs(spec):
            reason = ReasonCode.NOSPECS
        if reason is None:
            record = tighten_input({
                **spec,
                "article_id": article.article_id,
                "record_id": article.record_id,
                "date": article.date,
                "source_link": article.source_link,
            })
            if record is not None:
                records.append(record)
                continue
            invalid += 1
            reason = ReasonCode.INVALID

        logger.debug(f"Rejected {brand} {model} in article {article.article_id}: {reason.value}")
        rejected.append(RejectedCandidate(
            brand_name=brand or None,
            model=model or None,
            model_key=model_key or None,
            reason=reason,
            title=heading,
        ))
    return records, rejected, invalid


def _identity_ok(article: Article) -> bool:
    return to_article_id(article.article_id) is not None and bool(str(article.record_id or "").strip())


def extract_from_article(
    article: Article,
    regex_extractor: Optional[Extractor] = None,
    llm_extractor: Optional[Extractor] = None,
) -> ArticleExtraction:
    """Extract, validate and merge the shoe records of one article."""
    regex_extractor = regex_extractor or RegexExtractor()
    title_analysis = analyze_title(article.title)
    if title_analysis.scenario != TitleScenario.GENERAL:
        logger.debug(f"Article {article.article_id} title analysis: {title_analysis}")
    output = regex_extractor.extract(article)
    records, rejected, invalid = _gate_specs(article, output.specs, title_analysis)
    method = output.method if records else "none"

    used_llm = False
    if not records and llm_extractor is not None and _identity_ok(article):
        used_llm = True
        llm_output = llm_extractor.extract(article)
        llm_records, llm_rejected, llm_invalid = _gate_specs(article, llm_output.specs, title_analysis)
        rejected.extend(llm_rejected)
        invalid += llm_invalid
        if llm_records:
            records = llm_records
            method = llm_output.method

    records, deduplicated = deduplicate_in_document(records)
    accepted = {record.model_key for record in records}
    rejected = [r for r in rejected if not (r.reason == ReasonCode.NOSPECS and r.model_key in accepted)]

    logger.debug(
        f"Article {article.article_id}: method={method} records={len(records)} "
        f"rejected={len(rejected)} deduplicated={deduplicated}"
    )
    return ArticleExtraction(
        article_id=article.article_id,
        record_id=article.record_id,
        method=method,
        records=records,
        rejected=rejected,
        deduplicated=deduplicated,
        invalid=invalid,
        used_llm=used_llm,
    )
