"""
Cross-run upsert of extracted shoe records.

Rows are identified by ``(record_id, model_key)``. A new observation of a
stored model is merged with the stored row; the row is rewritten only when
the merged values differ, while ``updated_at`` is bumped on every match.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from models.db_retry import run_with_retry
from models.domain import ShoeResult
from services.shoe_extraction.deduplication import (
    has_scalar_conflict,
    is_payload_richer,
    merge_shoe_results,
)
from services.shoe_extraction.models import ShoeInput

logger = logging.getLogger(__name__)

IDENTITY_COLUMNS = ("record_id", "model_key")


@dataclass
class UpsertSummary:
    created: int = 0
    updated: int = 0
    unchanged: int = 0


def resolve_merge(existing: ShoeInput, incoming: ShoeInput) -> ShoeInput:
    """Merge a stored record with a new one.

    Field-level merging settles most disagreements. When both carry different
    non-null scalars, the richer record wins and the other only fills its gaps.
    """
    if has_scalar_conflict(existing, incoming) and is_payload_richer(incoming, existing):
        return merge_shoe_results(incoming, existing)
    return merge_shoe_results(existing, incoming)


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    return None


def _write(db: Session, record: ShoeInput, now: datetime, existing: Optional[ShoeResult]) -> None:
    values = {**record.to_dict(), "updated_at": now}
    insert = _dialect_insert(db)
    if insert is None:
        row = existing or ShoeResult()
        for name, value in values.items():
            setattr(row, name, value)
        db.add(row)
        db.flush()
        return

    stmt = insert(ShoeResult).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=list(IDENTITY_COLUMNS),
        set_={name: stmt.excluded[name] for name in values if name not in IDENTITY_COLUMNS},
    )
    db.execute(stmt)
    if existing is not None:
        db.expire(existing)


def _touch(db: Session, row: ShoeResult, now: datetime) -> None:
    db.execute(update(ShoeResult).where(ShoeResult.id == row.id).values(updated_at=now))
    db.expire(row)


def upsert_shoe(db: Session, record: ShoeInput, summary: Optional[UpsertSummary] = None) -> UpsertSummary:
    summary = summary or UpsertSummary()
    now = datetime.now(timezone.utc)
    existing = db.execute(
        select(ShoeResult).where(
            ShoeResult.record_id == record.record_id,
            ShoeResult.model_key == record.model_key,
        )
    ).scalar_one_or_none()

    if existing is None:
        _write(db, record, now, None)
        summary.created += 1
        return summary

    stored = existing.to_shoe_input()
    merged = resolve_merge(stored, record)
    if merged.to_dict() == stored.to_dict():
        _touch(db, existing, now)
        summary.unchanged += 1
    else:
        _write(db, merged, now, existing)
        summary.updated += 1
    return summary


def upsert_shoes(db: Session, records: Iterable[ShoeInput], commit: bool = True) -> UpsertSummary:
    """Upsert every record; with ``commit`` the batch is one unit of work retried as a whole."""
    records = list(records)

    def write_all() -> UpsertSummary:
        summary = UpsertSummary()
        for record in records:
            upsert_shoe(db, record, summary)
        return summary

    summary = run_with_retry(db, write_all) if commit else write_all()
    logger.debug(
        f"Upserted shoes: created={summary.created} updated={summary.updated} unchanged={summary.unchanged}"
    )
    return summary
