# core/errors.py

from fastapi import HTTPException, status


# ============================================================
# ERROR TAXONOMY
# ============================================================
# Every error below is an HTTPException, so the single handler
# registered in main.py renders all of them as {"detail": ...}.
# Handlers raise them once; nothing re-wraps them on the way out.
# ============================================================

class ValidationError(HTTPException):
    """Malformed or missing fields. The caller may fix and resubmit."""

    def __init__(self, detail: str = "Invalid request data"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    """No valid session."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """Valid session, insufficient role. Never partially applied."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """The row changed between read and conditional write."""

    def __init__(self, detail: str = "Resource was modified concurrently"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class RateLimitError(HTTPException):
    def __init__(self, detail: str = "Too many requests", retry_after: int = 60):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers={"Retry-After": str(retry_after)},
        )


class InternalError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# ============================================================
# SUPABASE ERROR TRANSLATION
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (APIError carries .message)
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)

    if error.args:
        return str(error.args[0])

    return str(error) or type(error).__name__


def handle_supabase_error(error: Exception, operation: str = "Database operation") -> HTTPException:
    """
    Map a store failure to the matching taxonomy error.
    Returns the exception (doesn't raise) so the caller re-raises it with `from`.
    """
    from core.logging_config import logger

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return ValidationError(f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return ValidationError(f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return NotFoundError(f"{operation}: Resource not found")
    else:
        return InternalError(f"{operation} failed")
