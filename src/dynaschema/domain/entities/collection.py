"""Collection entity."""

from dataclasses import dataclass, field

from dynaschema.domain.entities.attribute import Attribute
from dynaschema.domain.entities.index import Index
from dynaschema.domain.value_objects import PermissionAction, roles_for_action


@dataclass
class Collection:
    """Collection - groups documents under a runtime-defined schema."""

    id: str
    internal_id: str
    database_id: str
    name: str = ""
    enabled: bool = True
    document_security: bool = False
    permissions: list[str] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)

    def get_attribute(self, key: str) -> Attribute | None:
        return next((a for a in self.attributes if a.key == key), None)

    def get_index(self, key: str) -> Index | None:
        return next((i for i in self.indexes if i.key == key), None)

    def relationship_attributes(self) -> list[Attribute]:
        return [a for a in self.attributes if a.is_relationship]

    def roles_for(self, action: PermissionAction) -> list[str]:
        """Roles granted ``action`` at collection level."""
        return roles_for_action(self.permissions, action)
