"""Work order number allocator.

Numbers look like "{code}-{sequence}" (e.g. "E-006"). Each code has its own
sequence. The next value is always max(stored counter, highest number already
in work_orders) + 1, so a stale or missing counter row heals itself from the
issued numbers instead of handing out a duplicate.

Concurrent allocations for the same code serialize on that code's counter
row lock. Different codes never wait on each other.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workorders.config import settings
from workorders.services.numbering.scanner import IssuedNumberScanner
from workorders.services.numbering.store import WorkTypeCounterStore
from workorders.services.work_types import check_code_length, derive_work_type_code

logger = structlog.get_logger(__name__)


def format_work_order_number(code: str, sequence: int, digits: int | None = None) -> str:
    """Format "{code}-{sequence}" with the sequence zero-padded.

    Sequences wider than the padding are kept as-is (1000 -> "E-1000").
    """
    width = settings.work_order_number_digits if digits is None else digits
    return f"{code}-{sequence:0{width}d}"


def normalize_code_override(work_type_code: str | None) -> str | None:
    """Trim and upper-case an explicit code. Blank means no override.

    Raises:
        InvalidWorkTypeError: If the code does not fit the counter table key
    """
    if work_type_code is None:
        return None
    code = work_type_code.strip().upper()
    return check_code_length(code) if code else None


class WorkOrderNumberService:
    """Allocates, previews and resets per-work-type sequence numbers.

    Every call runs in its own session and transaction, independent of the
    caller's session, so the counter commits (or rolls back) on its own.
    The allocator does not retry: database errors roll back and propagate.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def generate_work_order_number(self, work_type: str, work_type_code: str | None = None) -> str:
        """Reserve and return the next number for a work type.

        Args:
            work_type: Work type name, used to derive the code
            work_type_code: Explicit code; takes precedence when non-blank

        Raises:
            InvalidWorkTypeError: No override given and work_type cannot be mapped
            SQLAlchemyError: Any database failure (transaction rolled back)
        """
        code = normalize_code_override(work_type_code) or derive_work_type_code(work_type)

        async with self.session_maker() as session, session.begin():
            store = WorkTypeCounterStore(session)
            scanner = IssuedNumberScanner(session)

            latest_from_orders = await scanner.latest_sequence(code)

            stored_counter = await store.get_for_update(code)
            if stored_counter is None:
                # First allocation for this code: create the row so there is something to lock
                await store.ensure_row(code)
                stored_counter = await store.get_for_update(code) or 0

            next_counter = max(stored_counter, latest_from_orders) + 1
            await store.upsert(code, next_counter)

        if latest_from_orders > stored_counter:
            logger.warning(
                "Counter behind issued work order numbers, healed from work_orders",
                work_type_code=code,
                stored_counter=stored_counter,
                latest_from_orders=latest_from_orders,
            )

        work_order_no = format_work_order_number(code, next_counter)
        logger.info(
            "Allocated work order number",
            work_order_no=work_order_no,
            work_type=work_type,
            work_type_code=code,
            counter=next_counter,
        )
        return work_order_no

    async def preview_next_work_order_number(self, work_type: str) -> str:
        """Return what generate_work_order_number() would issue right now.

        Takes no lock and writes nothing. Advisory only: another allocation may
        commit first, so the real number can be higher.
        """
        code = derive_work_type_code(work_type)

        async with self.session_maker() as session:
            stored_counter = await WorkTypeCounterStore(session).get(code) or 0
            latest_from_orders = await IssuedNumberScanner(session).latest_sequence(code)

        return format_work_order_number(code, max(stored_counter, latest_from_orders) + 1)

    async def get_work_type_counter(self, work_type: str) -> int:
        """Return the raw stored counter for a work type (0 if no row exists)."""
        code = derive_work_type_code(work_type)
        async with self.session_maker() as session:
            return await WorkTypeCounterStore(session).get(code) or 0

    async def reset_work_type_counter(self, work_type_code: str) -> None:
        """Set one code's counter to 0.

        Work orders are untouched, so the next allocation still continues
        after the highest number already issued.
        """
        code = work_type_code.strip().upper()
        async with self.session_maker() as session, session.begin():
            updated = await WorkTypeCounterStore(session).reset(code)
        logger.info("Reset work type counter", work_type_code=code, rows=updated)

    async def reset_all_work_type_counters(self) -> None:
        """Set every counter to 0. Work orders are untouched."""
        async with self.session_maker() as session, session.begin():
            updated = await WorkTypeCounterStore(session).reset()
        logger.info("Reset all work type counters", rows=updated)
