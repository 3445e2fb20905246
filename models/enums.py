from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Closed set of society roles. No hierarchy between them."""

    tenant = "tenant"
    manager = "manager"
    owner = "owner"
    visitor = "visitor"
    security = "security"


# -----------------------------------------------------
# APARTMENT STATUS
# -----------------------------------------------------
class ApartmentStatus(BaseStrEnum):
    vacant = "vacant"
    occupied = "occupied"


# -----------------------------------------------------
# MAINTENANCE STATUS
# -----------------------------------------------------
class MaintenanceStatus(BaseStrEnum):
    """Workflow state for a maintenance ticket."""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    denied = "denied"


# -----------------------------------------------------
# PAYMENT TYPE
# -----------------------------------------------------
class PaymentType(BaseStrEnum):
    rent = "rent"
    maintenance = "maintenance"


# -----------------------------------------------------
# VISITOR STATUS
# -----------------------------------------------------
class VisitorStatus(BaseStrEnum):
    """Gate state for a visitor. `pending` waits on a resident decision."""

    upcoming = "upcoming"
    current = "current"
    past = "past"
    pending = "pending"
