"""Per-category counter backing work order number allocation."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, String
from sqlmodel import Field, SQLModel

from workorders.models.types import utc_now

WORK_TYPE_CODE_MAX_LENGTH = 20


class WorkTypeCounter(SQLModel, table=True):
    """Last sequence number issued for a work type code, as tracked by this table.

    May lag behind the work_orders table when numbers were inserted through
    another path; the allocator reconciles both before issuing a new number.
    Rows are created lazily and never deleted.
    """

    __tablename__ = "work_type_counters"
    __table_args__ = (CheckConstraint("counter >= 0", name="ck_work_type_counters_counter_non_negative"),)

    work_type_code: str = Field(sa_column=Column(String(WORK_TYPE_CODE_MAX_LENGTH), primary_key=True))
    counter: int = Field(default=0, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
