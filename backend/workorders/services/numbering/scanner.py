"""Highest sequence number already issued for a work type code."""

import re

from sqlalchemy import BigInteger, Select, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from workorders.models.work_order import WorkOrder

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the code is matched literally."""
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def latest_sequence_statement(code: str) -> Select[tuple[int]]:
    """Max sequence of "{code}-{digits}" numbers as one aggregate (PostgreSQL regex operators)."""
    work_order_no = col(WorkOrder.work_order_no)
    sequence = cast(func.substring(work_order_no, "[0-9]+$"), BigInteger)
    return select(func.coalesce(func.max(sequence), 0)).where(
        work_order_no.regexp_match(f"^{re.escape(code)}-[0-9]+$", flags="i")
    )


class IssuedNumberScanner:
    """Reads work_orders to find what has actually been issued for a code.

    Guards the allocator against a counter table that drifted from reality
    (restored backups, rows inserted without going through the allocator).
    Never writes.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def latest_sequence(self, code: str) -> int:
        """Return the max sequence among numbers of the form "{code}-{digits}".

        The code is matched case-insensitively, the suffix must be ASCII digits only.
        Identifiers not matching the pattern are ignored. Returns 0 if none match.
        """
        if self.session.get_bind().dialect.name == "postgresql":
            result = await self.session.execute(latest_sequence_statement(code))
            return int(result.scalar_one())
        return await self._latest_sequence_by_prefix(code)

    async def _latest_sequence_by_prefix(self, code: str) -> int:
        """Narrow by prefix in SQL and apply the exact match here (no regex operator in SQLite)."""
        pattern = re.compile(rf"{re.escape(code)}-([0-9]+)", re.IGNORECASE)
        stmt = select(WorkOrder.work_order_no).where(
            col(WorkOrder.work_order_no).ilike(f"{_escape_like(code)}-%", escape=_LIKE_ESCAPE)
        )
        result = await self.session.execute(stmt)

        latest = 0
        for work_order_no in result.scalars():
            match = pattern.fullmatch(work_order_no)
            if match:
                latest = max(latest, int(match.group(1)))
        return latest
