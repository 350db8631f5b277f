"""API router for browsing extracted shoes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from models import ShoeResult, get_db
from models.schemas import ShoeListResponse, ShoeResponse

router = APIRouter()


@router.get("", response_model=ShoeListResponse)
async def list_shoes(
    brand: Optional[str] = Query(None, description="Exact brand name, case-insensitive"),
    surface_type: Optional[str] = Query(None, description="road, trail, track or mixed"),
    q: Optional[str] = Query(None, description="Substring of brand or model"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> ShoeListResponse:
    stmt = select(ShoeResult)
    if brand:
        stmt = stmt.where(func.lower(ShoeResult.brand_name) == brand.strip().lower())
    if surface_type:
        stmt = stmt.where(ShoeResult.surface_type == surface_type.strip().lower())
    if q:
        pattern = f"%{q.strip().lower()}%"
        stmt = stmt.where(or_(
            func.lower(ShoeResult.brand_name).like(pattern),
            func.lower(ShoeResult.model).like(pattern),
        ))

    total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
    rows = db.execute(
        stmt.order_by(ShoeResult.brand_name, ShoeResult.model, ShoeResult.id).offset(offset).limit(limit)
    ).scalars().all()
    return ShoeListResponse(total=total, items=[ShoeResponse.model_validate(r) for r in rows])


@router.get("/{shoe_id}", response_model=ShoeResponse)
async def get_shoe(shoe_id: int, db: Session = Depends(get_db)) -> ShoeResponse:
    shoe = db.get(ShoeResult, shoe_id)
    if not shoe:
        raise HTTPException(status_code=404, detail=f"Shoe {shoe_id} not found")
    return ShoeResponse.model_validate(shoe)
