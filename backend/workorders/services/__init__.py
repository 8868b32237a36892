"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- work_types: Work type names and their number prefixes
- numbering: Sequential work order number allocation
- work_orders: Work order creation and queries
"""
