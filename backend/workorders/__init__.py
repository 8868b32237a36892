"""Work order tracking backend."""
