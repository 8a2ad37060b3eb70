"""Status transitions of attributes and indexes."""

import logging

from dynaschema.domain.entities import Attribute, Index
from dynaschema.domain.exceptions import InvalidValue
from dynaschema.domain.value_objects import Status, WorkerOutcome

logger = logging.getLogger(__name__)

_OUTCOME_STATUS = {
    WorkerOutcome.APPLIED: Status.AVAILABLE,
    WorkerOutcome.FAILED: Status.FAILED,
}


def transition(element: Attribute | Index, target: Status) -> None:
    """Move ``element`` to ``target``, rejecting transitions the lifecycle does not allow."""
    if not element.status.can_transition_to(target):
        raise InvalidValue(
            f'Cannot move "{element.key}" from "{element.status}" to "{target}"',
            code="status_transition_invalid",
        )
    logger.info(
        "status_transition",
        extra={"element_id": element.id, "from": str(element.status), "to": str(target)},
    )
    element.status = target


def confirm(element: Attribute | Index, outcome: WorkerOutcome, error: str | None = None) -> bool:
    """Apply a worker outcome. Returns True when the element is to be removed."""
    if outcome is WorkerOutcome.REMOVED:
        if element.status is not Status.DELETING:
            raise InvalidValue(
                f'Cannot remove "{element.key}" while it is "{element.status}"',
                code="status_transition_invalid",
            )
        return True

    transition(element, _OUTCOME_STATUS[outcome])
    if outcome is WorkerOutcome.FAILED:
        element.error = error
    return False
