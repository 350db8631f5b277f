"""Sync pipeline: read new articles, extract shoes, persist and advance the watermark."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from metrics.metrics import RunSummary, field_coverage
from models.db_retry import run_with_retry
from services.content_source import ArticleSource
from services.rejections import log_article_rejection, log_rejections
from services.shoe_extraction.llm_extractor import LLMExtractionError
from services.shoe_extraction.models import Article, MalformedInputError, ShoeInput
from services.shoe_extraction.orchestrator import Extractor, extract_from_article
from services.shoe_extraction.relevance import classify_article
from services.shoe_extraction.spec_extractor import RegexExtractor
from services.shoe_upsert import UpsertSummary, upsert_shoes
from services.watermark import get_watermark, latest_position, save_watermark

logger = logging.getLogger(__name__)


def _process_article(
    db: Session,
    article: Article,
    summary: RunSummary,
    regex_extractor: Extractor,
    llm_extractor: Optional[Extractor],
    dry_run: bool,
) -> List[ShoeInput]:
    verdict = classify_article(article.title)
    if not verdict.ok:
        logger.debug(f"Skipping article {article.article_id}: {verdict.reason.value}")
        summary.record_skip(verdict.reason)
        if not dry_run:
            run_with_retry(db, lambda: log_article_rejection(db, article, verdict.reason))
        return []

    try:
        extraction = extract_from_article(article, regex_extractor, llm_extractor)
    except (MalformedInputError, LLMExtractionError) as e:
        logger.error(f"Article {article.article_id} failed: {e}")
        summary.articles_failed += 1
        return []

    summary.record_extraction(extraction)
    if dry_run:
        for record in extraction.records:
            logger.info(f"[dry-run] {record.brand_name} {record.model} ({extraction.method})")
        return extraction.records

    def persist() -> UpsertSummary:
        upserted = upsert_shoes(db, extraction.records, commit=False)
        log_rejections(db, article, extraction.rejected)
        return upserted

    # Counters are applied only once the article's writes are committed.
    upserted = run_with_retry(db, persist)
    summary.record_upsert(upserted.created, upserted.updated, upserted.unchanged)
    return extraction.records


def run_pipeline(
    db: Session,
    source: ArticleSource,
    llm_extractor: Optional[Extractor] = None,
    limit: Optional[int] = None,
    dry_run: bool = False,
    use_watermark: bool = True,
) -> RunSummary:
    """
    Run one sync over the articles the source returns.

    Each article is committed on its own. Content-source and database errors
    propagate; a malformed article or a failed LLM call only counts the
    article as failed. The watermark is left untouched in dry-run mode.
    """
    since = get_watermark(db).last_source_position if use_watermark else None
    logger.info(f"Starting shoe sync since={since or 'beginning'} limit={limit} dry_run={dry_run}")

    summary = RunSummary()
    regex_extractor = RegexExtractor()
    newest = since
    records: List[ShoeInput] = []

    for article in source.fetch_articles(since=since, limit=limit):
        newest = latest_position(newest, article.source_position)
        records.extend(_process_article(db, article, summary, regex_extractor, llm_extractor, dry_run))

    summary.coverage = field_coverage(records)
    if not dry_run:
        run_with_retry(db, lambda: save_watermark(db, newest, summary.as_dict()))

    logger.info(
        f"Shoe sync finished: processed={summary.articles_processed} skipped={summary.articles_skipped} "
        f"failed={summary.articles_failed} extracted={summary.models_extracted} "
        f"created={summary.records_created} updated={summary.records_updated} "
        f"unchanged={summary.records_unchanged}"
    )
    return summary
