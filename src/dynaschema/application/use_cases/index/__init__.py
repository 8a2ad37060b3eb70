"""Index use cases."""
