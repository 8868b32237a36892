"""Access to the work_type_counters table."""

from typing import Any

from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from workorders.models.types import utc_now
from workorders.models.work_type_counter import WorkTypeCounter


class WorkTypeCounterStore:
    """Counter rows keyed by work type code.

    All methods run inside the caller's session; committing is the caller's job.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self) -> Any:
        """Dialect-specific INSERT supporting ON CONFLICT."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(WorkTypeCounter)
        if dialect == "sqlite":
            return sqlite.insert(WorkTypeCounter)
        raise NotImplementedError(f"Unsupported database dialect: {dialect}")

    async def get(self, code: str) -> int | None:
        """Read the stored counter without locking. None if no row exists."""
        stmt = select(WorkTypeCounter.counter).where(WorkTypeCounter.work_type_code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, code: str) -> int | None:
        """Read the stored counter and lock its row until the transaction ends.

        Only the row for this code is locked. None if no row exists (nothing is locked then).
        """
        stmt = (
            select(WorkTypeCounter.counter)
            .where(WorkTypeCounter.work_type_code == code)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure_row(self, code: str) -> None:
        """Insert a zero counter row for code unless one already exists.

        Concurrent inserts of the same code wait on each other at the unique key,
        so afterwards get_for_update() has a row to lock.
        """
        stmt = (
            self._insert()
            .values(work_type_code=code, counter=0, updated_at=utc_now())
            .on_conflict_do_nothing(index_elements=["work_type_code"])
        )
        await self.session.execute(stmt)

    async def upsert(self, code: str, value: int) -> None:
        """Insert the row for code, or overwrite its counter and refresh updated_at."""
        now = utc_now()
        stmt = self._insert().values(work_type_code=code, counter=value, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=["work_type_code"],
            set_={"counter": value, "updated_at": now},
        )
        await self.session.execute(stmt)

    async def reset(self, code: str | None = None) -> int:
        """Set the counter to 0 for one code, or for every row when code is None.

        Rows are kept. Returns the number of rows touched.
        """
        stmt = update(WorkTypeCounter).values(counter=0, updated_at=utc_now())
        if code is not None:
            stmt = stmt.where(WorkTypeCounter.work_type_code == code)  # type: ignore[arg-type]
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
