"""Work order creation and queries."""
