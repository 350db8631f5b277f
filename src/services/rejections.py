from typing import Iterable, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.domain import RejectedShoe
from services.shoe_extraction.models import Article, ReasonCode, RejectedCandidate

RejectionKey = Tuple[Optional[str], str]


def _logged_keys(db: Session, record_id: str) -> Set[RejectionKey]:
    rows = db.execute(
        select(RejectedShoe.model_key, RejectedShoe.reason).where(RejectedShoe.record_id == record_id)
    ).all()
    return {(row.model_key, row.reason) for row in rows}


def log_rejections(db: Session, article: Article, rejected: Iterable[RejectedCandidate]) -> int:
    """Add one row per new ``(record_id, model_key, reason)``; reruns of an article add nothing."""
    record_id = str(article.record_id)
    seen = _logged_keys(db, record_id)
    count = 0
    for candidate in rejected:
        key = (candidate.model_key, candidate.reason.value)
        if key in seen:
            continue
        seen.add(key)
        db.add(RejectedShoe(
            record_id=record_id,
            model_key=candidate.model_key,
            brand_name=candidate.brand_name,
            model=candidate.model,
            reason=candidate.reason.value,
            source_link=article.source_link,
            title=candidate.title or article.title,
        ))
        count += 1
    return count


def log_article_rejection(db: Session, article: Article, reason: ReasonCode) -> None:
    record_id = str(article.record_id)
    if (None, reason.value) in _logged_keys(db, record_id):
        return
    db.add(RejectedShoe(
        record_id=record_id,
        reason=reason.value,
        source_link=article.source_link,
        title=article.title,
    ))
