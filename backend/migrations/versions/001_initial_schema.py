"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Create work_orders table (ULID as UUID)
    op.create_table(
        "work_orders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("work_order_no", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("work_order_date", sa.Date(), nullable=False),
        sa.Column("equipment_number", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("km_hrs", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("requested_by", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("work_type", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("job_allocation_time", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("reference_document", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("frs_reference_number", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "pending", "ongoing", "completion_requested", "completed", "rejected",
                name="workorderstatus",
                native_enum=False,
                length=32,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_work_orders_work_order_no"), "work_orders", ["work_order_no"], unique=True)

    # Create work_order_complaints table
    op.create_table(
        "work_order_complaints",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("work_order_id", sa.Uuid(), nullable=False),
        sa.Column("complaint", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["work_order_id"], ["work_orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_work_order_complaints_work_order_id"), "work_order_complaints", ["work_order_id"], unique=False
    )

    # Create work_type_counters table (one row per work type code, never deleted)
    op.create_table(
        "work_type_counters",
        sa.Column("work_type_code", sa.String(length=20), nullable=False),
        sa.Column("counter", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("counter >= 0", name="ck_work_type_counters_counter_non_negative"),
        sa.PrimaryKeyConstraint("work_type_code"),
    )


def downgrade() -> None:
    op.drop_table("work_type_counters")

    op.drop_index(op.f("ix_work_order_complaints_work_order_id"), table_name="work_order_complaints")
    op.drop_table("work_order_complaints")

    op.drop_index(op.f("ix_work_orders_work_order_no"), table_name="work_orders")
    op.drop_table("work_orders")
