"""API schemas for work order endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_serializer

from workorders.models.enums import WorkOrderStatus
from workorders.models.work_type_counter import WORK_TYPE_CODE_MAX_LENGTH
from workorders.models.work_order import WorkOrder, WorkOrderComplaint
from workorders.services.work_orders.work_order_service import WorkOrderDraft
from workorders.utils.datetime_utils import to_api_timezone

# =============================================================================
# Response Schemas
# =============================================================================


class ComplaintResponse(BaseModel):
    """Complaint response schema."""

    id: int
    complaint: str

    @classmethod
    def from_model(cls, complaint: WorkOrderComplaint) -> "ComplaintResponse":
        """Create response from WorkOrderComplaint model."""
        return cls(
            id=complaint.id,  # type: ignore[arg-type]
            complaint=complaint.complaint,
        )


class WorkOrderResponse(BaseModel):
    """Work order response schema."""

    id: str
    work_order_no: str
    work_order_date: date
    equipment_number: str
    km_hrs: str | None
    requested_by: str
    work_type: str
    job_allocation_time: str | None
    description: str
    reference_document: str | None
    frs_reference_number: str | None
    status: WorkOrderStatus
    complaints: list[ComplaintResponse]
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @classmethod
    def from_model(cls, work_order: WorkOrder) -> "WorkOrderResponse":
        """Create response from WorkOrder model."""
        return cls(
            id=work_order.id,
            work_order_no=work_order.work_order_no,
            work_order_date=work_order.work_order_date,
            equipment_number=work_order.equipment_number,
            km_hrs=work_order.km_hrs,
            requested_by=work_order.requested_by,
            work_type=work_order.work_type,
            job_allocation_time=work_order.job_allocation_time,
            description=work_order.description,
            reference_document=work_order.reference_document,
            frs_reference_number=work_order.frs_reference_number,
            status=work_order.status,
            complaints=[ComplaintResponse.from_model(c) for c in work_order.complaints],
            created_at=work_order.created_at,
        )


class WorkOrderListResponse(BaseModel):
    """Work order list response schema."""

    work_orders: list[WorkOrderResponse]
    total: int


class WorkOrderNumberResponse(BaseModel):
    """Work order number response."""

    work_order_no: str


class WorkTypeCounterResponse(BaseModel):
    """Stored counter for a work type."""

    work_type: str
    work_type_code: str
    counter: int


class StatusResponse(BaseModel):
    """Simple status response."""

    status: str
    message: str | None = None


# =============================================================================
# Request Schemas
# =============================================================================


class WorkOrderCreateRequest(BaseModel):
    """Request body for work order creation."""

    work_order_no: str | None = None
    work_order_date: date
    equipment_number: str = Field(min_length=1)
    km_hrs: str | None = None
    requested_by: str = Field(min_length=1)
    work_type: str = Field(min_length=1)
    work_type_code: str | None = Field(default=None, max_length=WORK_TYPE_CODE_MAX_LENGTH)
    job_allocation_time: str | None = None
    description: str = ""
    reference_document: str | None = None
    frs_reference_number: str | None = None
    complaints: list[str] = Field(default_factory=list)

    def to_draft(self) -> WorkOrderDraft:
        """Convert to the service input."""
        return WorkOrderDraft(**self.model_dump())


class GenerateNumberRequest(BaseModel):
    """Request body for number preview."""

    work_type: str = Field(min_length=1)


class ResetCountersRequest(BaseModel):
    """Request body for counter reset. Omit work_type_code to reset every counter."""

    work_type_code: str | None = Field(default=None, max_length=WORK_TYPE_CODE_MAX_LENGTH)
