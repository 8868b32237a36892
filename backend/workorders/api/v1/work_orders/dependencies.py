"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workorders.db import async_session_maker, get_session
from workorders.services.numbering import WorkOrderNumberService
from workorders.services.work_orders.work_order_service import WorkOrderService


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the session factory used for self-contained transactions."""
    return async_session_maker


def get_number_service(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
) -> WorkOrderNumberService:
    """Get a WorkOrderNumberService instance."""
    return WorkOrderNumberService(session_maker)


def get_work_order_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    numbers: Annotated[WorkOrderNumberService, Depends(get_number_service)],
) -> WorkOrderService:
    """Get a WorkOrderService instance with the current session."""
    return WorkOrderService(session, numbers)


# Type aliases for cleaner endpoint signatures
NumberServiceDep = Annotated[WorkOrderNumberService, Depends(get_number_service)]
WorkOrderServiceDep = Annotated[WorkOrderService, Depends(get_work_order_service)]
