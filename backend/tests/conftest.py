"""Shared fixtures: SQLite database per test, services and API client."""

from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import workorders.models  # noqa: F401
from workorders.models.work_order import WorkOrder
from workorders.services.numbering import WorkOrderNumberService


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """File-backed SQLite engine whose transactions take the write lock up front.

    BEGIN IMMEDIATE makes concurrent transactions wait for each other, which is
    what the counter row lock does on PostgreSQL.
    """
    engine = create_async_engine(sqlite_url(tmp_path / "test.db"), connect_args={"timeout": 30})

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def numbers(session_maker: async_sessionmaker[AsyncSession]) -> WorkOrderNumberService:
    return WorkOrderNumberService(session_maker)


@pytest.fixture
def add_work_orders(session_maker: async_sessionmaker[AsyncSession]):  # type: ignore[no-untyped-def]
    """Insert work orders directly, bypassing the allocator (manual inserts, restored data)."""

    async def _add(*work_order_nos: str) -> None:
        async with session_maker() as session, session.begin():
            for work_order_no in work_order_nos:
                session.add(
                    WorkOrder(
                        work_order_no=work_order_no,
                        work_order_date=date(2025, 3, 1),
                        equipment_number="EQ-1",
                        requested_by="Imported",
                        work_type="Imported",
                    )
                )

    return _add


@pytest.fixture
async def client(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    from workorders.api.v1.work_orders.dependencies import get_session_maker
    from workorders.db import get_session
    from workorders.main import app

    async def _get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_session_maker] = lambda: session_maker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
