"""Domain value objects."""

from dynaschema.domain.value_objects.attribute_type import (
    AttributeFormat,
    AttributeType,
    IndexOrder,
    IndexType,
    OnDelete,
    RelationSide,
    RelationType,
)
from dynaschema.domain.value_objects.permission import Permission, roles_for_action
from dynaschema.domain.value_objects.permission_action import (
    CONCRETE_ACTIONS,
    DOCUMENT_ACTIONS,
    PermissionAction,
)
from dynaschema.domain.value_objects.query import GroupedQueries, Query, QueryMethod
from dynaschema.domain.value_objects.role import (
    DIMENSION_UNVERIFIED,
    DIMENSION_VERIFIED,
    USER_DIMENSIONS,
    Role,
    RoleKind,
)
from dynaschema.domain.value_objects.status import Status, WorkerOutcome

__all__ = [
    "AttributeFormat",
    "AttributeType",
    "CONCRETE_ACTIONS",
    "DIMENSION_UNVERIFIED",
    "DIMENSION_VERIFIED",
    "DOCUMENT_ACTIONS",
    "GroupedQueries",
    "IndexOrder",
    "IndexType",
    "OnDelete",
    "Permission",
    "PermissionAction",
    "Query",
    "QueryMethod",
    "RelationSide",
    "RelationType",
    "Role",
    "RoleKind",
    "Status",
    "USER_DIMENSIONS",
    "WorkerOutcome",
    "roles_for_action",
]
