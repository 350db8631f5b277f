from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from metrics.metrics import field_coverage
from models.domain import RejectedShoe, ShoeResult
from services.watermark import get_watermark


def collect_stats(db: Session) -> Dict[str, Any]:
    shoes = db.execute(select(ShoeResult)).scalars().all()
    brand_rows = db.execute(
        select(ShoeResult.brand_name, func.count()).group_by(ShoeResult.brand_name)
    ).all()
    reason_rows = db.execute(
        select(RejectedShoe.reason, func.count()).group_by(RejectedShoe.reason)
    ).all()
    watermark = get_watermark(db)
    return {
        "total_shoes": len(shoes),
        "total_articles": len({shoe.record_id for shoe in shoes}),
        "total_rejected": sum(count for _, count in reason_rows),
        "brands": {brand: count for brand, count in brand_rows},
        "rejections_by_reason": {reason: count for reason, count in reason_rows},
        "field_coverage": field_coverage([shoe.to_shoe_input() for shoe in shoes]),
        "watermark": {
            "last_source_position": watermark.last_source_position,
            "last_run_at": watermark.last_run_at,
            "counters": watermark.counters,
        },
    }
