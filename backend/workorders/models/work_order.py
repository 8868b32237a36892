"""WorkOrder and WorkOrderComplaint database models."""

from datetime import date, datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Text
from sqlmodel import Field, Relationship, SQLModel

from workorders.models.enums import WorkOrderStatus
from workorders.models.types import ULIDType, new_ulid, utc_now


class WorkOrder(SQLModel, table=True):
    """Maintenance work order."""

    __tablename__ = "work_orders"

    # ULID stored as UUID
    id: str = Field(
        default_factory=new_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )

    # Display number: "{code}-{sequence}", e.g. "E-006"
    work_order_no: str = Field(unique=True, index=True, max_length=50)

    work_order_date: date
    equipment_number: str
    km_hrs: str | None = None
    requested_by: str
    work_type: str
    job_allocation_time: str | None = None
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    reference_document: str | None = None
    frs_reference_number: str | None = None
    status: WorkOrderStatus = Field(
        default=WorkOrderStatus.PENDING,
        sa_column=Column(
            Enum(
                WorkOrderStatus,
                values_callable=lambda e: [x.value for x in e],
                name="workorderstatus",
                native_enum=False,
                length=32,
            ),
            nullable=False,
        ),
    )
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    complaints: list["WorkOrderComplaint"] = Relationship(back_populates="work_order")


class WorkOrderComplaint(SQLModel, table=True):
    """Complaint reported for a work order."""

    __tablename__ = "work_order_complaints"

    id: int | None = Field(default=None, primary_key=True)
    work_order_id: str = Field(
        sa_column=Column(ULIDType, ForeignKey("work_orders.id", ondelete="CASCADE"), index=True, nullable=False),
    )
    complaint: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    work_order: WorkOrder = Relationship(back_populates="complaints")
