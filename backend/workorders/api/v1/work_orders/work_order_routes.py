"""Work order CRUD API endpoints."""

import structlog
from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from workorders.api.v1.work_orders.dependencies import WorkOrderServiceDep
from workorders.api.v1.work_orders.schemas import (
    WorkOrderCreateRequest,
    WorkOrderListResponse,
    WorkOrderResponse,
)
from workorders.models.enums import WorkOrderStatus
from workorders.services.exceptions import ValidationError
from workorders.services.work_orders.exceptions import WorkOrderNotFound
from workorders.utils.db_retry import get_db_retrying

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["work-orders"])


def parse_status_filter(status: str | None) -> list[WorkOrderStatus] | None:
    """Parse "?status=a,b" into statuses. None or "all" means no filter."""
    if not status or status == "all":
        return None
    try:
        return [WorkOrderStatus(s.strip()) for s in status.split(",") if s.strip()]
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid status filter: {status}")


@router.get("/work-orders", response_model=WorkOrderListResponse, operation_id="listWorkOrders")
async def list_work_orders(
    service: WorkOrderServiceDep,
    status: str | None = None,
) -> WorkOrderListResponse:
    """List work orders, newest first. Status accepts a comma-separated list."""
    work_orders = await service.list_work_orders(parse_status_filter(status))
    return WorkOrderListResponse(
        work_orders=[WorkOrderResponse.from_model(wo) for wo in work_orders],
        total=len(work_orders),
    )


@router.post("/work-orders", response_model=WorkOrderResponse, operation_id="createWorkOrder")
async def create_work_order(
    body: WorkOrderCreateRequest,
    service: WorkOrderServiceDep,
) -> WorkOrderResponse:
    """Create a work order. A number is allocated when work_order_no is blank."""
    draft = body.to_draft()
    try:
        async for attempt in get_db_retrying():
            with attempt:
                work_order = await service.create_work_order(draft)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Failed to create work order", work_type=draft.work_type)
        raise HTTPException(status_code=500, detail="Could not create work order")

    return WorkOrderResponse.from_model(work_order)


@router.get("/work-orders/{work_order_no}", response_model=WorkOrderResponse, operation_id="getWorkOrder")
async def get_work_order(
    work_order_no: str,
    service: WorkOrderServiceDep,
) -> WorkOrderResponse:
    """Get a single work order by its number."""
    try:
        work_order = await service.get_work_order(work_order_no)
        return WorkOrderResponse.from_model(work_order)
    except WorkOrderNotFound:
        raise HTTPException(status_code=404, detail="Work order not found")
