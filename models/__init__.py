# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    ApartmentStatus,
    MaintenanceStatus,
    PaymentType,
    VisitorStatus,
)

# -------------------------
# Apartment Models
# -------------------------
from .apartment import (
    ApartmentBase,
    ApartmentCreate,
    ApartmentRead,
    ApartmentUpdate,
)

# -------------------------
# Maintenance Models
# -------------------------
from .maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceStatusUpdate,
)

# -------------------------
# Payment Models
# -------------------------
from .payment import (
    PaymentCreate,
    PaymentRead,
    UpiPaymentRequest,
    UpiPaymentResponse,
)

# -------------------------
# Visitor Models
# -------------------------
from .visitor import (
    VisitorBase,
    VisitorCreate,
    VisitorRead,
    VisitorStatusUpdate,
    VisitorActionResponse,
)

# -------------------------
# Announcement Models
# -------------------------
from .announcement import (
    AnnouncementCreate,
    AnnouncementRead,
)

# -------------------------
# Auth Models
# -------------------------
from .auth import LoginRequest, RegisterRequest, LogoutResponse

__all__ = [
    # enums
    "Role",
    "ApartmentStatus",
    "MaintenanceStatus",
    "PaymentType",
    "VisitorStatus",

    # apartments
    "ApartmentBase",
    "ApartmentCreate",
    "ApartmentRead",
    "ApartmentUpdate",

    # maintenance
    "MaintenanceRequestCreate",
    "MaintenanceRequestRead",
    "MaintenanceStatusUpdate",

    # payments
    "PaymentCreate",
    "PaymentRead",
    "UpiPaymentRequest",
    "UpiPaymentResponse",

    # visitors
    "VisitorBase",
    "VisitorCreate",
    "VisitorRead",
    "VisitorStatusUpdate",
    "VisitorActionResponse",

    # announcements
    "AnnouncementCreate",
    "AnnouncementRead",

    # auth
    "LoginRequest",
    "RegisterRequest",
    "LogoutResponse",
]
