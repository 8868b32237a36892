"""Work order number endpoints: preview, counter diagnostics, resets."""

import structlog
from fastapi import APIRouter, HTTPException

from workorders.api.v1.work_orders.dependencies import NumberServiceDep
from workorders.api.v1.work_orders.schemas import (
    GenerateNumberRequest,
    ResetCountersRequest,
    StatusResponse,
    WorkOrderNumberResponse,
    WorkTypeCounterResponse,
)
from workorders.services.work_types import InvalidWorkTypeError, derive_work_type_code

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["work-order-numbers"])


@router.post(
    "/work-orders/generate-number",
    response_model=WorkOrderNumberResponse,
    operation_id="previewWorkOrderNumber",
)
async def preview_work_order_number(
    body: GenerateNumberRequest,
    service: NumberServiceDep,
) -> WorkOrderNumberResponse:
    """Show the number the next work order of this type would get.

    Nothing is reserved; the number is assigned when the work order is created.
    """
    try:
        work_order_no = await service.preview_next_work_order_number(body.work_type)
    except InvalidWorkTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return WorkOrderNumberResponse(work_order_no=work_order_no)


@router.get(
    "/work-orders/counters/{work_type}",
    response_model=WorkTypeCounterResponse,
    operation_id="getWorkTypeCounter",
)
async def get_work_type_counter(
    work_type: str,
    service: NumberServiceDep,
) -> WorkTypeCounterResponse:
    """Get the stored counter for a work type (0 if it has never been used)."""
    try:
        code = derive_work_type_code(work_type)
        counter = await service.get_work_type_counter(work_type)
    except InvalidWorkTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return WorkTypeCounterResponse(work_type=work_type, work_type_code=code, counter=counter)


@router.post("/work-orders/reset-counters", response_model=StatusResponse, operation_id="resetWorkTypeCounters")
async def reset_work_type_counters(
    body: ResetCountersRequest,
    service: NumberServiceDep,
) -> StatusResponse:
    """Reset one work type counter, or all of them when no code is given.

    Existing work orders are kept, so numbering continues after the highest
    number already issued.
    """
    code = (body.work_type_code or "").strip()
    if code:
        await service.reset_work_type_counter(code)
        return StatusResponse(
            status="reset",
            message=f'Counter for work type code "{code.upper()}" has been reset',
        )

    await service.reset_all_work_type_counters()
    return StatusResponse(status="reset", message="All work type counters have been reset")
