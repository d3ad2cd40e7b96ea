"""Initial availability tables

Revision ID: 0001_initial
Revises:
Create Date: 2025-01-10
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    sport_skill = postgresql.ENUM("snowboarding", "skiing", name="sportskill")
    sport_skill.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "single_listings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("teacher_id", sa.String(length=128), nullable=False, index=True),
        sa.Column("date", sa.Date(), nullable=False, index=True),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "skill",
            postgresql.ENUM(name="sportskill", create_type=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("price > 0", name="ck_single_listing_price_positive"),
        sa.CheckConstraint("start_time < end_time", name="ck_single_listing_time_order"),
    )

    op.create_table(
        "recurrence_rules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("teacher_id", sa.String(length=128), nullable=False, index=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "skill",
            postgresql.ENUM(name="sportskill", create_type=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("start_date <= end_date", name="ck_recurrence_rule_date_window"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_recurrence_rule_day_of_week"),
        sa.CheckConstraint("price > 0", name="ck_recurrence_rule_price_positive"),
        sa.CheckConstraint("start_time < end_time", name="ck_recurrence_rule_time_order"),
    )

    op.create_table(
        "recurrence_exclusions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "rule_id",
            sa.Integer(),
            sa.ForeignKey("recurrence_rules.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("rule_id", "date", name="uq_recurrence_exclusion_rule_date"),
    )


def downgrade() -> None:
    op.drop_table("recurrence_exclusions")
    op.drop_table("recurrence_rules")
    op.drop_table("single_listings")
    postgresql.ENUM(name="sportskill").drop(op.get_bind(), checkfirst=True)
