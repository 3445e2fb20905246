# services/visibility.py
"""
Per-role read filters for the list endpoints.

`visibility_rule` is pure: given the actor and the bits of context it
needs (which apartments the actor rents or owns) it returns a
VisibilityRule. The same rule works as an in-memory predicate
(`matches`) and as a PostgREST filter (`apply`), so what a handler
returns is exactly what the policy says the actor may see.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, FrozenSet

from supabase import Client

from core.errors import handle_supabase_error
from dependencies.auth import CurrentUser
from models.enums import BaseStrEnum, Role


class Resource(BaseStrEnum):
    apartment = "apartment"
    maintenance = "maintenance"
    payment = "payment"
    visitor = "visitor"
    announcement = "announcement"


@dataclass(frozen=True)
class VisibilityRule:
    """Unrestricted when `column` is None, else `column IN values`."""

    column: Optional[str] = None
    values: FrozenSet = frozenset()

    @classmethod
    def everything(cls) -> "VisibilityRule":
        return cls()

    @classmethod
    def where(cls, column: str, values: Iterable) -> "VisibilityRule":
        return cls(column=column, values=frozenset(values))

    @property
    def is_unrestricted(self) -> bool:
        return self.column is None

    @property
    def is_empty(self) -> bool:
        return self.column is not None and not self.values

    def matches(self, row: dict) -> bool:
        if self.is_unrestricted:
            return True
        return row.get(self.column) in self.values

    def apply(self, query):
        if self.is_unrestricted:
            return query
        values = sorted(self.values, key=str)
        if len(values) == 1:
            return query.eq(self.column, values[0])
        return query.in_(self.column, values)


def visibility_rule(
    actor: CurrentUser,
    resource: Resource,
    *,
    tenant_apartment_ids: Iterable[int] = (),
    owned_apartment_ids: Iterable[int] = (),
) -> VisibilityRule:
    """
    tenant_apartment_ids must be ordered by apartment id; tenants only
    see visitors for the first of them.
    """
    role = actor.role

    if resource == Resource.announcement:
        return VisibilityRule.everything()

    if resource == Resource.apartment:
        if role == Role.owner:
            return VisibilityRule.where("owner_id", [actor.id])
        if role in (Role.manager, Role.security):
            return VisibilityRule.everything()
        return VisibilityRule.where("tenant_id", [actor.id])

    if resource == Resource.maintenance:
        # Owners are not scoped to their apartments here; they see every ticket.
        if role == Role.tenant:
            return VisibilityRule.where("tenant_id", [actor.id])
        return VisibilityRule.everything()

    if resource == Resource.payment:
        if role in (Role.manager, Role.security):
            return VisibilityRule.everything()
        if role == Role.owner:
            return VisibilityRule.where("apartment_id", owned_apartment_ids)
        return VisibilityRule.where("tenant_id", [actor.id])

    if resource == Resource.visitor:
        if role == Role.tenant:
            first = list(tenant_apartment_ids)[:1]
            return VisibilityRule.where("apartment_id", first)
        return VisibilityRule.everything()

    raise ValueError(f"Unknown resource type: {resource}")


# ------------------------------------------------------------------
# Context lookups
# ------------------------------------------------------------------

def apartment_ids_for(client: Client, column: str, user_id: str) -> list:
    try:
        result = (
            client.table("apartments")
            .select("id")
            .eq(column, user_id)
            .order("id")
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch apartments") from e

    return [row["id"] for row in result.data or []]


def resolve_visibility(client: Client, actor: CurrentUser, resource: Resource) -> VisibilityRule:
    """Fetch only the context the actor's role needs, then apply the policy."""
    tenant_apartment_ids = ()
    owned_apartment_ids = ()

    if resource == Resource.visitor and actor.role == Role.tenant:
        tenant_apartment_ids = apartment_ids_for(client, "tenant_id", actor.id)
    if resource == Resource.payment and actor.role == Role.owner:
        owned_apartment_ids = apartment_ids_for(client, "owner_id", actor.id)

    return visibility_rule(
        actor,
        resource,
        tenant_apartment_ids=tenant_apartment_ids,
        owned_apartment_ids=owned_apartment_ids,
    )
