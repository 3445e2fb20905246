# services/maintenance_lifecycle.py

from typing import Union

from core.errors import AuthorizationError, ValidationError
from core.logging_config import logger
from core.roles import can_approve_maintenance
from dependencies.auth import CurrentUser
from models.enums import MaintenanceStatus


# Moving a ticket to any of these is a manager decision
MANAGED_STATUSES = frozenset({
    MaintenanceStatus.in_progress,
    MaintenanceStatus.completed,
    MaintenanceStatus.denied,
})

TERMINAL_STATUSES = frozenset({MaintenanceStatus.completed, MaintenanceStatus.denied})


def parse_status(value: Union[str, MaintenanceStatus]) -> MaintenanceStatus:
    try:
        return MaintenanceStatus(value)
    except ValueError:
        raise ValidationError("Invalid status") from None


def initial_fields() -> dict:
    return {"status": MaintenanceStatus.pending}


def plan_status_change(request: dict, target: Union[str, MaintenanceStatus], actor: CurrentUser) -> dict:
    """
    Patch for PATCH /maintenance/{id}.
    Re-targeting pending is open to any authenticated user.
    """
    target = parse_status(target)

    if target in MANAGED_STATUSES and not can_approve_maintenance(actor.role):
        raise AuthorizationError("Only managers can update maintenance request status")

    current = parse_status(request["status"])
    if current in TERMINAL_STATUSES and target != current:
        # TODO: decide with the society committee whether closed tickets may be re-opened
        logger.warning(
            f"Maintenance request {request['id']} re-opened from {current.value} "
            f"to {target.value} by {actor.id}"
        )

    return {"status": target}
