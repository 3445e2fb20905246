from fastapi import Depends

from core.errors import AuthorizationError
from core.permissions import ROLE_PERMISSIONS
from dependencies.auth import get_current_user, CurrentUser


# -----------------------------------------------------
# Effective permissions come from the role alone;
# roles are immutable, so there are no per-user grants.
# -----------------------------------------------------
def get_effective_permissions(user: CurrentUser) -> set:
    return set(ROLE_PERMISSIONS.get(user.role.value, []))


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_permission(user: CurrentUser, permission: str) -> bool:
    return permission in get_effective_permissions(user)


def require_permission(user: CurrentUser, permission: str, detail: str = None):
    """Raise AuthorizationError unless the user holds `permission`."""
    if not has_permission(user, permission):
        raise AuthorizationError(detail or f"Insufficient permissions: '{permission}' required")


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(permission: str, detail: str = None):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_permission("apartments:write"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        require_permission(current_user, permission, detail)
        return current_user

    return dependency

