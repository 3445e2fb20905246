# services/visitor_lifecycle.py
"""
Visitor gate workflow.

    upcoming ──(security: request approval)──► pending + pending_approval
    pending  ──(owner/tenant/manager: approve)──► current   (entry stamped)
    pending  ──(owner/tenant/manager: deny)─────► past      (exit stamped)
    any      ──(generic status set)─────────────► upcoming | current | past

The functions here never touch the store. Each returns the column
patch to write, or raises before anything is written. Handlers write
the patch conditionally on the status they validated against.
"""

from datetime import datetime
from typing import Optional, Union

from core.errors import AuthorizationError, ConflictError, ValidationError
from core.roles import can_decide_visitor, is_gate_staff
from dependencies.auth import CurrentUser
from models.enums import Role, VisitorStatus


# Targets accepted by the generic status endpoint
SETTABLE_STATUSES = frozenset({VisitorStatus.upcoming, VisitorStatus.current, VisitorStatus.past})

# pending → one of these is a resident/manager decision
DECISION_STATUSES = frozenset({VisitorStatus.current, VisitorStatus.past})

# statuses security may flag for a decision
FLAGGABLE_STATUSES = frozenset({VisitorStatus.upcoming, VisitorStatus.pending})


def parse_status(value: Union[str, VisitorStatus]) -> VisitorStatus:
    try:
        return VisitorStatus(value)
    except ValueError:
        raise ValidationError("Invalid status") from None


def parse_target(value: Union[str, VisitorStatus]) -> VisitorStatus:
    """Targets the generic status endpoint accepts; checked before any read."""
    target = parse_status(value)
    if target not in SETTABLE_STATUSES:
        raise ValidationError("Invalid status")
    return target


def initial_fields() -> dict:
    """Columns forced on every new visitor, whatever the client sent."""
    return {"status": VisitorStatus.upcoming, "pending_approval": False}


def ensure_can_decide(actor: CurrentUser, apartment: Optional[dict]):
    """
    Managers decide for any apartment. Tenants and owners only for the
    apartment they rent or own.
    """
    if not can_decide_visitor(actor.role):
        raise AuthorizationError("Only owners, tenants, or managers can approve or deny visitors")

    if actor.role == Role.manager:
        return

    column = "tenant_id" if actor.role == Role.tenant else "owner_id"
    if apartment is None or apartment.get(column) != actor.id:
        raise AuthorizationError("You can only approve or deny visitors for your own apartment")


def plan_status_change(
    visitor: dict,
    target: Union[str, VisitorStatus],
    actor: CurrentUser,
    now: datetime,
    apartment: Optional[dict] = None,
) -> dict:
    """
    Patch for PATCH /visitors/{id}/status.

    Only pending → current/past is guarded; every other move is allowed to
    any authenticated user. Every move clears pending_approval.
    """
    target = parse_target(target)

    current = parse_status(visitor["status"])
    if current == VisitorStatus.pending and target in DECISION_STATUSES:
        ensure_can_decide(actor, apartment)

    patch = {
        "status": target,
        "approved_by": actor.id,
        "pending_approval": False,
    }
    if target == VisitorStatus.current:
        patch["actual_entry_at"] = now
    elif target == VisitorStatus.past:
        patch["actual_exit_at"] = now

    return patch


def ensure_can_request_approval(actor: CurrentUser):
    if not is_gate_staff(actor.role):
        raise AuthorizationError("Only security personnel can request approvals")


def plan_approval_request(visitor: dict) -> dict:
    """
    Patch for POST /visitors/{id}/request-approval.
    An upcoming visitor at the gate moves to pending with the flag set.
    """
    current = parse_status(visitor["status"])
    if current not in FLAGGABLE_STATUSES:
        raise ConflictError(f"Cannot request approval for a visitor who is {current.value}")

    return {"status": VisitorStatus.pending, "pending_approval": True}


def ensure_can_notify(actor: CurrentUser):
    if not is_gate_staff(actor.role):
        raise AuthorizationError("Only security personnel can send notifications")
