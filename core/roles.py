# ============================================
# ROLE → CAPABILITY GROUPS
# ============================================
# Roles are a closed set with no hierarchy: "security" is not a
# lesser "manager". Every protected operation names the group it
# needs and checks membership explicitly through the predicates below.
# ============================================
from typing import Union

from models.enums import Role


# =====================================================
# ADMIN GROUP: apartments, announcements, /all views
# =====================================================
ADMIN_GROUP = frozenset({Role.manager, Role.owner, Role.security})

# =====================================================
# MAINTENANCE APPROVERS: may move a ticket out of pending
# =====================================================
MAINTENANCE_APPROVERS = frozenset({Role.manager})

# =====================================================
# VISITOR DECIDERS: may approve/deny a pending visitor
# =====================================================
VISITOR_DECIDERS = frozenset({Role.owner, Role.tenant, Role.manager})

# =====================================================
# GATE STAFF: flags visitors and notifies residents
# =====================================================
GATE_STAFF = frozenset({Role.security})


def to_role(value: Union[str, Role, None]) -> Role:
    """Coerce a stored role string; anything unknown gets the least privilege."""
    try:
        return Role(value)
    except ValueError:
        return Role.visitor


def can_approve_maintenance(role) -> bool:
    return to_role(role) in MAINTENANCE_APPROVERS


def can_decide_visitor(role) -> bool:
    return to_role(role) in VISITOR_DECIDERS


def is_gate_staff(role) -> bool:
    return to_role(role) in GATE_STAFF
