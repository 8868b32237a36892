"""Enum definitions for database models."""

from enum import StrEnum


class WorkOrderStatus(StrEnum):
    """Status of a work order in the maintenance workflow."""

    PENDING = "pending"
    ONGOING = "ongoing"
    COMPLETION_REQUESTED = "completion_requested"
    COMPLETED = "completed"
    REJECTED = "rejected"
