"""Collection use cases."""
