"""Work type lookup endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from workorders.services.work_types import WORK_TYPE_CODES, WORK_TYPES

router = APIRouter()


class WorkTypeResponse(BaseModel):
    """Work type and its number prefix."""

    name: str
    code: str


@router.get("/work-types", response_model=list[WorkTypeResponse], operation_id="listWorkTypes")
async def list_work_types() -> list[WorkTypeResponse]:
    """List predefined work types with their codes."""
    return [WorkTypeResponse(name=name, code=WORK_TYPE_CODES[name]) for name in WORK_TYPES]
