# core/utils.py

from datetime import date, datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sanitize(data: dict) -> dict:
    """
    Prepare a row for PostgREST:
    - Strip string whitespace, empty strings → None
    - Enums → their value
    - datetimes/dates → ISO 8601 strings
    - Preserve booleans, numbers, lists and None
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, Enum):
            clean[k] = v.value
        elif isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
        elif isinstance(v, (datetime, date)):
            clean[k] = v.isoformat()
        else:
            clean[k] = v

    return clean
