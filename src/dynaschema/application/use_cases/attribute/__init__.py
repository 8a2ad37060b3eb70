"""Attribute use cases."""
