"""Database models."""

from workorders.models.enums import WorkOrderStatus
from workorders.models.work_order import WorkOrder, WorkOrderComplaint
from workorders.models.work_type_counter import WorkTypeCounter

__all__ = [
    "WorkOrder",
    "WorkOrderComplaint",
    "WorkOrderStatus",
    "WorkTypeCounter",
]
