# core/supabase_helpers.py

from typing import Optional

from supabase import Client

from core.errors import ConflictError, NotFoundError, handle_supabase_error
from core.utils import sanitize


# =================================================================
#  SAFE SELECT / INSERT / UPDATE
# =================================================================
# Every store call made by the routers goes through these helpers,
# so a PostgREST failure is translated exactly once.
# =================================================================

def safe_get(client: Client, table: str, row_id: int) -> Optional[dict]:
    """Fetch one row by primary key, or None."""
    try:
        result = (
            client.table(table)
            .select("*")
            .eq("id", row_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to fetch from {table}") from e

    return result.data[0] if result.data else None


def safe_select(
    client: Client,
    table: str,
    filters: dict = None,
    *,
    rule=None,
    order: str = "id",
    desc: bool = False,
) -> list:
    """
    SELECT with equality filters and an optional visibility rule
    (services.visibility.VisibilityRule) pushed into the query.
    """
    if rule is not None and rule.is_empty:
        return []

    try:
        query = client.table(table).select("*")
        for key, val in (filters or {}).items():
            query = query.eq(key, val)
        if rule is not None:
            query = rule.apply(query)

        result = query.order(order, desc=desc).execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to fetch from {table}") from e

    return result.data or []


def safe_insert(client: Client, table: str, data: dict) -> dict:
    """INSERT one row and return its representation."""
    cleaned = sanitize(data)

    try:
        result = client.table(table).insert(cleaned).execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to insert into {table}") from e

    if not result.data:
        raise handle_supabase_error(
            RuntimeError("no row returned"), f"Failed to insert into {table}"
        )
    return result.data[0]


def safe_update(client: Client, table: str, filters: dict, data: dict) -> Optional[dict]:
    """UPDATE rows matching every filter; returns the first updated row or None."""
    cleaned = sanitize(data)

    try:
        query = client.table(table).update(cleaned)
        for key, val in filters.items():
            query = query.eq(key, val)

        result = query.execute()
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to update {table}") from e

    return result.data[0] if result.data else None


def compare_and_swap(
    client: Client,
    table: str,
    row_id: int,
    expected: dict,
    data: dict,
    *,
    label: str = "Resource",
) -> dict:
    """
    Conditional UPDATE: applies `data` only while the row still holds the
    `expected` column values it was validated against.

    Raises NotFoundError when the row is gone and ConflictError when it
    exists but changed underneath us.
    """
    updated = safe_update(client, table, {"id": row_id, **expected}, data)
    if updated is not None:
        return updated

    if safe_get(client, table, row_id) is None:
        raise NotFoundError(f"{label} not found")
    raise ConflictError(f"{label} was modified by another request; reload and retry")
