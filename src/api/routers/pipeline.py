"""API router for pipeline state and manual syncs."""

import os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from config import settings
from models import RejectedShoe, get_db
from models.schemas import (
    PipelineStatsResponse,
    RejectedShoeResponse,
    SyncRequest,
    SyncResponse,
    WatermarkResponse,
)
from services.content_source import AirtableArticleSource
from services.pipeline_stats import collect_stats
from services.shoe_extraction.llm_extractor import build_llm_extractor
from services.watermark import get_watermark
from workers.pipeline import run_pipeline
from workers.tasks import sync_articles

router = APIRouter()

RUN_TASKS_INLINE = os.getenv("RUN_TASKS_INLINE", "false").lower() == "true"


def build_source():
    return AirtableArticleSource.from_settings(settings)


def _watermark_response(db: Session) -> WatermarkResponse:
    watermark = get_watermark(db)
    return WatermarkResponse(
        last_source_position=watermark.last_source_position,
        last_run_at=watermark.last_run_at,
        counters=watermark.counters,
    )


@router.get("/stats", response_model=PipelineStatsResponse)
async def get_stats(db: Session = Depends(get_db)) -> PipelineStatsResponse:
    return PipelineStatsResponse(**collect_stats(db))


@router.get("/watermark", response_model=WatermarkResponse)
async def read_watermark(db: Session = Depends(get_db)) -> WatermarkResponse:
    return _watermark_response(db)


@router.get("/rejections", response_model=List[RejectedShoeResponse])
async def list_rejections(
    reason: Optional[str] = Query(None, description="Filter by reason code"),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> List[RejectedShoeResponse]:
    stmt = select(RejectedShoe)
    if reason:
        stmt = stmt.where(RejectedShoe.reason == reason)
    rows = db.execute(stmt.order_by(RejectedShoe.id.desc()).limit(limit)).scalars().all()
    return [RejectedShoeResponse.model_validate(r) for r in rows]


@router.post("/sync", response_model=SyncResponse, status_code=202)
def start_sync(
    payload: SyncRequest | None = None,
    db: Session = Depends(get_db),
) -> SyncResponse:
    """
    Sync new articles into the shoe table.

    Queues the Celery task, or runs the pipeline in the request when
    RUN_TASKS_INLINE is set. A plain ``def`` so FastAPI runs the blocking
    pipeline in its threadpool instead of on the event loop.
    """
    payload = payload or SyncRequest()
    if not RUN_TASKS_INLINE:
        task = sync_articles.delay(payload.limit, payload.dry_run)
        return SyncResponse(status="queued", task_id=task.id)

    try:
        source = build_source()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        summary = run_pipeline(
            db,
            source,
            llm_extractor=build_llm_extractor(settings),
            limit=payload.limit,
            dry_run=payload.dry_run,
        )
    finally:
        source.close()
    return SyncResponse(status="completed", summary=summary.as_dict())
