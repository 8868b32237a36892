"""Work order domain exceptions."""

from workorders.services.exceptions import NotFoundError, ValidationError


class WorkOrderNotFound(NotFoundError):
    """Work order not found."""

    pass


class DuplicateWorkOrderNumber(ValidationError):
    """Manually entered work order number is already in use."""

    def __init__(self, work_order_no: str):
        self.work_order_no = work_order_no
        super().__init__(f'Work order number "{work_order_no}" already exists. Please use a unique number.')
