"""Tests for work order creation and queries."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workorders.models.enums import WorkOrderStatus
from workorders.services.numbering import WorkOrderNumberService
from workorders.services.work_orders.exceptions import DuplicateWorkOrderNumber, WorkOrderNotFound
from workorders.services.work_orders.work_order_service import (
    MAX_ALLOCATION_ATTEMPTS,
    WorkOrderDraft,
    WorkOrderService,
    build_complaints,
)
from workorders.services.work_types import InvalidWorkTypeError


@pytest.fixture
def service(session: AsyncSession, numbers: WorkOrderNumberService) -> WorkOrderService:
    return WorkOrderService(session, numbers)


def make_draft(**overrides: object) -> WorkOrderDraft:
    fields: dict[str, object] = {
        "work_order_date": date(2025, 5, 12),
        "equipment_number": "GEN-04",
        "requested_by": "Shift Supervisor",
        "work_type": "Electrical",
        "description": "generator not starting",
    }
    fields.update(overrides)
    return WorkOrderDraft(**fields)  # type: ignore[arg-type]


def test_build_complaints_drops_blank_entries() -> None:
    assert build_complaints("Desc", ["  loose CABLE ", "", "   "]) == ["Loose Cable"]


def test_build_complaints_falls_back_to_description() -> None:
    assert build_complaints("Desc", []) == ["Desc"]
    assert build_complaints("", []) == []


def test_build_complaints_all_blank_yields_none() -> None:
    assert build_complaints("Desc", ["  ", ""]) == []


async def test_create_allocates_number(service: WorkOrderService) -> None:
    first = await service.create_work_order(make_draft())
    second = await service.create_work_order(make_draft(work_order_no="   "))

    assert first.work_order_no == "E-001"
    assert second.work_order_no == "E-002"
    assert first.status == WorkOrderStatus.PENDING


async def test_create_uses_code_override(service: WorkOrderService) -> None:
    work_order = await service.create_work_order(make_draft(work_type="Others", work_type_code="gen"))

    assert work_order.work_order_no == "GEN-001"


async def test_create_proper_cases_description_and_complaints(service: WorkOrderService) -> None:
    work_order = await service.create_work_order(
        make_draft(description="  GENERATOR not starting ", complaints=["battery FLAT", " "])
    )

    assert work_order.description == "Generator Not Starting"
    assert [c.complaint for c in work_order.complaints] == ["Battery Flat"]


async def test_create_without_complaints_uses_description(service: WorkOrderService) -> None:
    work_order = await service.create_work_order(make_draft())

    assert [c.complaint for c in work_order.complaints] == ["Generator Not Starting"]


async def test_manual_number_is_kept(service: WorkOrderService, numbers: WorkOrderNumberService) -> None:
    work_order = await service.create_work_order(make_draft(work_order_no="E-050"))

    assert work_order.work_order_no == "E-050"
    # Allocation continues after the manually entered number
    assert await numbers.preview_next_work_order_number("Electrical") == "E-051"


async def test_duplicate_manual_number_is_rejected(service: WorkOrderService) -> None:
    await service.create_work_order(make_draft(work_order_no="E-007"))

    with pytest.raises(DuplicateWorkOrderNumber, match="E-007"):
        await service.create_work_order(make_draft(work_order_no="E-007"))


async def test_unmappable_work_type_is_rejected(service: WorkOrderService) -> None:
    with pytest.raises(InvalidWorkTypeError):
        await service.create_work_order(make_draft(work_type="??"))


async def test_blank_complaints_store_none(service: WorkOrderService) -> None:
    work_order = await service.create_work_order(make_draft(complaints=["", "   "]))

    assert work_order.complaints == []


async def test_allocated_number_taken_concurrently_is_reallocated(
    service: WorkOrderService,
    numbers: WorkOrderNumberService,
    add_work_orders,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    generate = numbers.generate_work_order_number
    allocated: list[str] = []

    async def generate_then_insert_manually(work_type: str, code: str | None = None) -> str:
        work_order_no = await generate(work_type, code)
        allocated.append(work_order_no)
        if len(allocated) == 1:
            # Someone enters the same number by hand before our insert
            await add_work_orders(work_order_no)
        return work_order_no

    monkeypatch.setattr(numbers, "generate_work_order_number", generate_then_insert_manually)

    work_order = await service.create_work_order(make_draft())

    assert allocated == ["E-001", "E-002"]
    assert work_order.work_order_no == "E-002"
    assert [c.complaint for c in work_order.complaints] == ["Generator Not Starting"]


async def test_reallocation_gives_up_after_max_attempts(
    service: WorkOrderService,
    numbers: WorkOrderNumberService,
    add_work_orders,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    generate = numbers.generate_work_order_number
    calls = 0

    async def always_taken(work_type: str, code: str | None = None) -> str:
        nonlocal calls
        calls += 1
        work_order_no = await generate(work_type, code)
        await add_work_orders(work_order_no)
        return work_order_no

    monkeypatch.setattr(numbers, "generate_work_order_number", always_taken)

    with pytest.raises(IntegrityError):
        await service.create_work_order(make_draft())
    assert calls == MAX_ALLOCATION_ATTEMPTS


async def test_override_longer_than_code_column_is_rejected(service: WorkOrderService) -> None:
    with pytest.raises(InvalidWorkTypeError):
        await service.create_work_order(make_draft(work_type_code="ABCDEFGHIJKLMNOPQRSTU"))


async def test_list_filters_by_status(service: WorkOrderService, session: AsyncSession) -> None:
    pending = await service.create_work_order(make_draft())
    done = await service.create_work_order(make_draft(work_type="Painting"))
    done.status = WorkOrderStatus.COMPLETED
    await session.commit()

    all_orders = await service.list_work_orders()
    completed = await service.list_work_orders([WorkOrderStatus.COMPLETED])
    open_orders = await service.list_work_orders([WorkOrderStatus.PENDING, WorkOrderStatus.ONGOING])

    assert {wo.work_order_no for wo in all_orders} == {pending.work_order_no, done.work_order_no}
    assert [wo.work_order_no for wo in completed] == ["P-001"]
    assert [wo.work_order_no for wo in open_orders] == ["E-001"]


async def test_get_work_order(service: WorkOrderService) -> None:
    await service.create_work_order(make_draft(complaints=["no power"]))

    work_order = await service.get_work_order("E-001")

    assert work_order.equipment_number == "GEN-04"
    assert [c.complaint for c in work_order.complaints] == ["No Power"]


async def test_get_missing_work_order(service: WorkOrderService) -> None:
    with pytest.raises(WorkOrderNotFound):
        await service.get_work_order("E-999")
