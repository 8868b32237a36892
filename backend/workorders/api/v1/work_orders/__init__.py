"""Work orders API package.

- number_routes: Number preview, counter diagnostics and counter resets
- work_order_routes: Work order create, list and detail
"""

from fastapi import APIRouter

from workorders.api.v1.work_orders.number_routes import router as number_router
from workorders.api.v1.work_orders.work_order_routes import router as work_order_router

router = APIRouter()

# Number routes first: "/work-orders/generate-number" must not be captured by "/work-orders/{work_order_no}"
router.include_router(number_router)
router.include_router(work_order_router)

__all__ = ["router"]
