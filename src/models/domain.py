from dataclasses import fields
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from services.shoe_extraction.models import ShoeInput

from .database import Base


class ShoeResult(Base):
    __tablename__ = "shoe_results"
    __table_args__ = (
        UniqueConstraint("record_id", "model_key", name="uq_shoe_results_record_model"),
        {'extend_existing': True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    article_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    record_id: Mapped[str] = mapped_column(String(64), nullable=False)
    brand_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
    model_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    source_link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    heel_height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    forefoot_height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    drop: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    upper_breathability: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    carbon_plate: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    waterproof: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    primary_use: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    cushioning_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    surface_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    foot_width: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    additional_features: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def to_shoe_input(self) -> ShoeInput:
        return ShoeInput(**{f.name: getattr(self, f.name) for f in fields(ShoeInput)})


class EtlState(Base):
    __tablename__ = "etl_state"
    __table_args__ = {'extend_existing': True}

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class RejectedShoe(Base):
    __tablename__ = "shoe_results_rejected"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    model_key: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    brand_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reason: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    source_link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
