"""Sequential work order number allocation.

- store: WorkTypeCounterStore, the per-code counter table
- scanner: IssuedNumberScanner, highest sequence already present in work_orders
- service: WorkOrderNumberService, reconcile-and-increment allocator
"""

from workorders.services.numbering.scanner import IssuedNumberScanner
from workorders.services.numbering.service import WorkOrderNumberService, format_work_order_number
from workorders.services.numbering.store import WorkTypeCounterStore

__all__ = [
    "IssuedNumberScanner",
    "WorkOrderNumberService",
    "WorkTypeCounterStore",
    "format_work_order_number",
]
