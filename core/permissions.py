# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
# Built from the capability groups in core.roles so the two views
# of the policy cannot drift apart.
# ============================================
from core.roles import ADMIN_GROUP
from models.enums import Role


# Granted to every authenticated user
BASE_PERMISSIONS = [
    "apartments:read",
    "maintenance:read", "maintenance:write",
    "payments:read", "payments:write",
    "visitors:read", "visitors:write",
    "announcements:read",
]

# Permission → the group that holds it
GROUP_PERMISSIONS = {
    "apartments:read_all": ADMIN_GROUP,
    "apartments:write": ADMIN_GROUP,
    "announcements:write": ADMIN_GROUP,
}


def build_role_permissions() -> dict:
    permissions = {}
    for role in Role:
        granted = list(BASE_PERMISSIONS)
        granted.extend(
            perm for perm, group in GROUP_PERMISSIONS.items() if role in group
        )
        permissions[role.value] = granted
    return permissions


ROLE_PERMISSIONS = build_role_permissions()
