"""Database entity."""

from dataclasses import dataclass


@dataclass
class Database:
    """Database - logical namespace grouping collections."""

    id: str
    internal_id: str
    name: str = ""
    enabled: bool = True
