"""Two-step creation of a relationship attribute and its mirror.

Primary and mirror live in different collections and no transaction spans
both writes. The primary is written first; when the mirror write fails the
primary is deleted again and the outcome is reported as ``PrimaryOnly``.
"""

import logging
from dataclasses import dataclass

from dynaschema.application.ports import StoreException
from dynaschema.application.ports.repositories import AttributeRepository
from dynaschema.domain.entities import Attribute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Created:
    """Primary persisted, and the mirror too when one was requested."""

    primary: Attribute
    mirror: Attribute | None = None


@dataclass(frozen=True)
class PrimaryOnly:
    """Mirror write failed after the primary was persisted.

    ``compensated`` tells whether the primary was deleted again. When it is
    False the primary is left orphaned in ``processing``.
    """

    primary: Attribute
    compensated: bool
    cause: StoreException


MirrorResult = Created | PrimaryOnly


async def create_with_mirror(
    attributes: AttributeRepository,
    primary: Attribute,
    mirror: Attribute | None = None,
) -> MirrorResult:
    """Persist ``primary`` then ``mirror``.

    A failure writing the primary propagates unchanged, since nothing has
    been written yet.
    """
    created = await attributes.create(primary)
    if mirror is None:
        return Created(created)

    try:
        created_mirror = await attributes.create(mirror)
    except StoreException as exc:
        logger.warning(
            "mirror_attribute_failed",
            extra={"attribute_id": created.id, "mirror_id": mirror.id, "error": str(exc)},
        )
        return PrimaryOnly(created, await _compensate(attributes, created), exc)
    return Created(created, created_mirror)


async def _compensate(attributes: AttributeRepository, primary: Attribute) -> bool:
    try:
        deleted = await attributes.delete(primary.id)
    except StoreException:
        logger.exception("mirror_compensation_failed", extra={"attribute_id": primary.id})
        return False
    if not deleted:
        logger.error("mirror_compensation_failed", extra={"attribute_id": primary.id})
    return deleted
