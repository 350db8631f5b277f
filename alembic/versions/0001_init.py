"""shoe results, rejections and etl state

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "shoe_results",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("article_id", sa.Integer(), nullable=False),
        sa.Column("record_id", sa.String(64), nullable=False),
        sa.Column("brand_name", sa.String(100), nullable=False),
        sa.Column("model", sa.String(255), nullable=False),
        sa.Column("model_key", sa.String(255), nullable=False),
        sa.Column("date", sa.String(40)),
        sa.Column("source_link", sa.Text()),
        sa.Column("heel_height", sa.Float()),
        sa.Column("forefoot_height", sa.Float()),
        sa.Column("drop", sa.Float()),
        sa.Column("weight", sa.Float()),
        sa.Column("price", sa.Float()),
        sa.Column("upper_breathability", sa.String(20)),
        sa.Column("carbon_plate", sa.Boolean()),
        sa.Column("waterproof", sa.Boolean()),
        sa.Column("primary_use", sa.String(50)),
        sa.Column("cushioning_type", sa.String(20)),
        sa.Column("surface_type", sa.String(20)),
        sa.Column("foot_width", sa.String(20)),
        sa.Column("additional_features", sa.Text()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("record_id", "model_key", name="uq_shoe_results_record_model"),
    )
    op.create_index("ix_shoe_results_article_id", "shoe_results", ["article_id"])
    op.create_index("ix_shoe_results_brand_name", "shoe_results", ["brand_name"])
    op.create_index("ix_shoe_results_model_key", "shoe_results", ["model_key"])
    op.create_index("ix_shoe_results_surface_type", "shoe_results", ["surface_type"])

    op.create_table(
        "shoe_results_rejected",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("record_id", sa.String(64), nullable=False),
        sa.Column("model_key", sa.String(255)),
        sa.Column("brand_name", sa.String(100)),
        sa.Column("model", sa.String(255)),
        sa.Column("reason", sa.String(20), nullable=False),
        sa.Column("source_link", sa.Text()),
        sa.Column("title", sa.Text()),
        _timestamp("created_at"),
    )
    op.create_index("ix_shoe_results_rejected_record_id", "shoe_results_rejected", ["record_id"])
    op.create_index("ix_shoe_results_rejected_reason", "shoe_results_rejected", ["reason"])

    op.create_table(
        "etl_state",
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("value", sa.JSON(), nullable=False),
        _timestamp("updated_at"),
    )


def downgrade() -> None:
    op.drop_table("etl_state")
    op.drop_table("shoe_results_rejected")
    op.drop_table("shoe_results")
