import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models.domain import EtlState
from services.shoe_extraction.normalizer import to_iso_or_none

logger = logging.getLogger(__name__)

WATERMARK_KEY = "shoe_pipeline.watermark"
DEFAULT_POSITION = "1970-01-01T00:00:00+00:00"


@dataclass
class Watermark:
    last_source_position: str = DEFAULT_POSITION
    last_run_at: Optional[str] = None
    counters: Dict[str, Any] = field(default_factory=dict)


def get_watermark(db: Session) -> Watermark:
    state = db.get(EtlState, WATERMARK_KEY)
    if state is None or not isinstance(state.value, dict):
        return Watermark()
    value = state.value
    return Watermark(
        last_source_position=value.get("last_source_position") or DEFAULT_POSITION,
        last_run_at=value.get("last_run_at"),
        counters=dict(value.get("counters") or {}),
    )


def save_watermark(db: Session, position: Optional[str], counters: Dict[str, Any]) -> Watermark:
    """Store the position reached by a run. The caller commits."""
    watermark = Watermark(
        last_source_position=to_iso_or_none(position) or DEFAULT_POSITION,
        last_run_at=datetime.now(timezone.utc).isoformat(),
        counters=dict(counters),
    )
    state = db.get(EtlState, WATERMARK_KEY)
    if state is None:
        state = EtlState(key=WATERMARK_KEY)
        db.add(state)
    state.value = asdict(watermark)
    db.flush()
    logger.info(f"Watermark advanced to {watermark.last_source_position}")
    return watermark


def reset_watermark(db: Session) -> None:
    state = db.get(EtlState, WATERMARK_KEY)
    if state is not None:
        db.delete(state)
        db.flush()


def latest_position(current: Optional[str], candidate: Optional[str]) -> Optional[str]:
    """Return whichever ISO position is later; unparseable candidates are ignored."""
    candidate_iso = to_iso_or_none(candidate)
    if candidate_iso is None:
        return current
    current_iso = to_iso_or_none(current)
    if current_iso is None:
        return candidate_iso
    if datetime.fromisoformat(candidate_iso) > datetime.fromisoformat(current_iso):
        return candidate_iso
    return current_iso
