"""Dynamic schema and relationship management engine for document collections."""

__version__ = "0.1.0"
