"""Pure search logic with no I/O of its own."""
