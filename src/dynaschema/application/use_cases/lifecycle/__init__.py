"""Lifecycle use cases."""
