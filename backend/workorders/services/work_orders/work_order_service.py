"""Work order management service.

Creates work orders (allocating a number when none is given) and serves
list/detail queries. Retrying transient database failures is left to the
caller (see utils.db_retry).
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import col, select

from workorders.models.enums import WorkOrderStatus
from workorders.models.work_order import WorkOrder, WorkOrderComplaint
from workorders.services.numbering import WorkOrderNumberService
from workorders.services.work_orders.exceptions import DuplicateWorkOrderNumber, WorkOrderNotFound
from workorders.services.work_types import to_proper_case

logger = structlog.get_logger(__name__)

MAX_ALLOCATION_ATTEMPTS = 3


@dataclass
class WorkOrderDraft:
    """Input for creating a work order."""

    work_order_date: date
    equipment_number: str
    requested_by: str
    work_type: str
    work_order_no: str | None = None  # Allocated when blank
    work_type_code: str | None = None  # Overrides the code derived from work_type
    km_hrs: str | None = None
    job_allocation_time: str | None = None
    description: str = ""
    reference_document: str | None = None
    frs_reference_number: str | None = None
    complaints: list[str] = field(default_factory=list)


def build_complaints(description: str, complaints: Sequence[str]) -> list[str]:
    """Proper-case the non-blank complaints.

    Only when no complaints were sent at all does the description become the
    single complaint; a list of blank entries yields none.
    """
    if complaints:
        return [to_proper_case(c.strip()) for c in complaints if c and c.strip()]
    return [description] if description else []


class WorkOrderService:
    """Service for work order operations."""

    def __init__(self, session: AsyncSession, numbers: WorkOrderNumberService):
        self.session = session
        self.numbers = numbers

    async def create_work_order(self, draft: WorkOrderDraft) -> WorkOrder:
        """Create a work order with its complaints.

        A blank work_order_no is allocated from the work type's sequence. A given
        one must not exist yet. When an allocated number was taken by a concurrent
        insert in the meantime, a fresh one is allocated (the allocator sees the
        conflicting row); after MAX_ALLOCATION_ATTEMPTS the IntegrityError propagates.

        Raises:
            DuplicateWorkOrderNumber: Given number is already used
            InvalidWorkTypeError: Number must be allocated but work type cannot be mapped
        """
        manual_no = (draft.work_order_no or "").strip()
        try:
            if manual_no and await self._number_exists(manual_no):
                raise DuplicateWorkOrderNumber(manual_no)

            for attempt in range(1, MAX_ALLOCATION_ATTEMPTS + 1):
                work_order_no = manual_no or await self.numbers.generate_work_order_number(
                    draft.work_type, draft.work_type_code
                )
                work_order = self._build_work_order(draft, work_order_no)
                self.session.add(work_order)
                try:
                    await self.session.commit()
                    break
                except IntegrityError as e:
                    # Another request stored the same number between the check/allocation and the insert
                    if not await self._number_exists_after_rollback(work_order_no):
                        raise
                    if manual_no:
                        raise DuplicateWorkOrderNumber(manual_no) from e
                    if attempt == MAX_ALLOCATION_ATTEMPTS:
                        raise
                    logger.warning(
                        "Allocated work order number already taken, allocating again",
                        work_order_no=work_order_no,
                        attempt=attempt,
                    )
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Created work order",
            work_order_id=work_order.id,
            work_order_no=work_order.work_order_no,
            work_type=work_order.work_type,
            complaints=len(work_order.complaints),
        )
        return work_order

    def _build_work_order(self, draft: WorkOrderDraft, work_order_no: str) -> WorkOrder:
        description = to_proper_case(draft.description.strip())
        return WorkOrder(
            work_order_no=work_order_no,
            work_order_date=draft.work_order_date,
            equipment_number=draft.equipment_number,
            km_hrs=draft.km_hrs,
            requested_by=draft.requested_by,
            work_type=draft.work_type,
            job_allocation_time=draft.job_allocation_time,
            description=description,
            reference_document=draft.reference_document or None,
            frs_reference_number=draft.frs_reference_number or None,
            status=WorkOrderStatus.PENDING,
            complaints=[
                WorkOrderComplaint(complaint=text)
                for text in build_complaints(description, draft.complaints)
            ],
        )

    async def list_work_orders(self, statuses: Sequence[WorkOrderStatus] | None = None) -> list[WorkOrder]:
        """List work orders newest first, optionally filtered by status."""
        stmt = (
            select(WorkOrder)
            .options(selectinload(WorkOrder.complaints))  # type: ignore[arg-type]
            .order_by(col(WorkOrder.created_at).desc())
        )
        if statuses:
            stmt = stmt.where(col(WorkOrder.status).in_(statuses))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_work_order(self, work_order_no: str) -> WorkOrder:
        """Get a work order by its number, with complaints loaded."""
        stmt = (
            select(WorkOrder)
            .options(selectinload(WorkOrder.complaints))  # type: ignore[arg-type]
            .where(WorkOrder.work_order_no == work_order_no)
        )
        result = await self.session.execute(stmt)
        work_order = result.scalars().first()
        if not work_order:
            raise WorkOrderNotFound()
        return work_order

    async def _number_exists(self, work_order_no: str) -> bool:
        stmt = select(WorkOrder.id).where(WorkOrder.work_order_no == work_order_no)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def _number_exists_after_rollback(self, work_order_no: str) -> bool:
        await self.session.rollback()
        exists = await self._number_exists(work_order_no)
        # End the read so the next allocation does not wait on this session
        await self.session.rollback()
        return exists
