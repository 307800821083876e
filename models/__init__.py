# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    UnitStatus,
    MaintenanceStatus,
    MaintenancePriority,
    ShowingStatus,
    RecordType,
    CalculationType,
    SortDirection,
    NotificationVariant,
)

# -------------------------
# User / Auth Models
# -------------------------
from .user import User, Profile, ProfileUpdate
from .auth import LoginRequest, SignupRequest

# -------------------------
# Property + Unit Models
# -------------------------
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyRead,
    PropertyUpdate,
    UnitBase,
    UnitCreate,
    UnitRead,
    UnitUpdate,
)

# -------------------------
# Tenant Models
# -------------------------
from .tenant import (
    TenantBase,
    TenantCreate,
    TenantRead,
    TenantUpdate,
    RentCalculation,
)

# -------------------------
# Maintenance Models
# -------------------------
from .maintenance import (
    MaintenanceComment,
    MaintenanceRequest,
    MaintenanceRequestCreate,
    AssignRequest,
    CommentCreate,
    SortConfig,
    SortSelection,
)

# -------------------------
# Showings / Financials / Notifications
# -------------------------
from .reports import Showing, FinancialRecord
from .notification import Notification

__all__ = [
    # enums
    "Role",
    "UnitStatus",
    "MaintenanceStatus",
    "MaintenancePriority",
    "ShowingStatus",
    "RecordType",
    "CalculationType",
    "SortDirection",
    "NotificationVariant",

    # users / auth
    "User",
    "Profile",
    "ProfileUpdate",
    "LoginRequest",
    "SignupRequest",

    # properties + units
    "PropertyBase",
    "PropertyCreate",
    "PropertyRead",
    "PropertyUpdate",
    "UnitBase",
    "UnitCreate",
    "UnitRead",
    "UnitUpdate",

    # tenants
    "TenantBase",
    "TenantCreate",
    "TenantRead",
    "TenantUpdate",
    "RentCalculation",

    # maintenance
    "MaintenanceComment",
    "MaintenanceRequest",
    "MaintenanceRequestCreate",
    "AssignRequest",
    "CommentCreate",
    "SortConfig",
    "SortSelection",

    # showings / financials / notifications
    "Showing",
    "FinancialRecord",
    "Notification",
]
