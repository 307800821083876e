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
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Dashboard role; decides visible data and permitted views."""

    investor = "investor"
    property_manager = "property_manager"
    tenant = "tenant"
    potential_tenant = "potential_tenant"
    maintenance = "maintenance"

    @property
    def display_name(self) -> str:
        # Only the first underscore is replaced ("property manager")
        return self.value.replace("_", " ", 1)


# -----------------------------------------------------
# UNIT STATUS
# -----------------------------------------------------
class UnitStatus(BaseStrEnum):
    """Externally driven; any status may follow any other."""

    vacant = "vacant"
    occupied = "occupied"
    maintenance = "maintenance"


# -----------------------------------------------------
# MAINTENANCE REQUEST STATUS
# -----------------------------------------------------
class MaintenanceStatus(BaseStrEnum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


# -----------------------------------------------------
# MAINTENANCE PRIORITY
# -----------------------------------------------------
class MaintenancePriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    emergency = "emergency"


# -----------------------------------------------------
# SHOWING STATUS
# -----------------------------------------------------
class ShowingStatus(BaseStrEnum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


# -----------------------------------------------------
# FINANCIAL RECORD TYPE
# -----------------------------------------------------
class RecordType(BaseStrEnum):
    income = "income"
    expense = "expense"


# -----------------------------------------------------
# RENT CALCULATION
# -----------------------------------------------------
class CalculationType(BaseStrEnum):
    percentage = "percentage"
    fixed = "fixed"


# -----------------------------------------------------
# SORTING
# -----------------------------------------------------
class SortDirection(BaseStrEnum):
    asc = "asc"
    desc = "desc"


# -----------------------------------------------------
# NOTIFICATION VARIANT
# -----------------------------------------------------
class NotificationVariant(BaseStrEnum):
    default = "default"
    destructive = "destructive"
