from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ShoeResponse(BaseModel):
    id: int
    article_id: int
    record_id: str
    brand_name: str
    model: str
    model_key: str
    date: Optional[str]
    source_link: Optional[str]
    heel_height: Optional[float]
    forefoot_height: Optional[float]
    drop: Optional[float]
    weight: Optional[float]
    price: Optional[float]
    upper_breathability: Optional[str]
    carbon_plate: Optional[bool]
    waterproof: Optional[bool]
    primary_use: Optional[str]
    cushioning_type: Optional[str]
    surface_type: Optional[str]
    foot_width: Optional[str]
    additional_features: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "protected_namespaces": ()}


class ShoeListResponse(BaseModel):
    total: int
    items: List[ShoeResponse]


class RejectedShoeResponse(BaseModel):
    id: int
    record_id: str
    model_key: Optional[str]
    brand_name: Optional[str]
    model: Optional[str]
    reason: str
    source_link: Optional[str]
    title: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True, "protected_namespaces": ()}


class WatermarkResponse(BaseModel):
    last_source_position: str
    last_run_at: Optional[str]
    counters: Dict[str, object] = Field(default_factory=dict)


class PipelineStatsResponse(BaseModel):
    total_shoes: int
    total_articles: int
    total_rejected: int
    brands: Dict[str, int]
    rejections_by_reason: Dict[str, int]
    field_coverage: Dict[str, float]
    watermark: WatermarkResponse


class SyncRequest(BaseModel):
    limit: Optional[int] = Field(None, ge=1)
    dry_run: bool = False


class SyncResponse(BaseModel):
    status: str
    task_id: Optional[str] = None
    summary: Optional[Dict[str, object]] = None
