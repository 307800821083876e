# models/maintenance.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.enums import MaintenancePriority, MaintenanceStatus, SortDirection


class MaintenanceComment(BaseModel):
    id: str
    text: str
    created_at: datetime
    created_by: str


class MaintenanceRequest(BaseModel):
    id: str
    property_id: str
    unit_number: str
    title: str
    description: str
    status: MaintenanceStatus = MaintenanceStatus.pending
    priority: MaintenancePriority = MaintenancePriority.medium
    created_at: datetime
    created_by: str
    assigned_to: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    comments: List[MaintenanceComment] = Field(default_factory=list)


# -----------------------------------------------------
# Form payloads
# -----------------------------------------------------
class MaintenanceRequestCreate(BaseModel):
    """Blank fields are rejected with a notification, not a 422."""
    title: str = ""
    description: str = ""
    property_id: str = ""
    unit_number: str = ""
    priority: MaintenancePriority = MaintenancePriority.medium


class AssignRequest(BaseModel):
    assigned_to: str


class CommentCreate(BaseModel):
    text: str = ""


# -----------------------------------------------------
# List sort state
# -----------------------------------------------------
class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = "created_at"
    direction: SortDirection = SortDirection.desc

    def toggle(self, key: str) -> "SortConfig":
        """
        Selecting the current key again flips the direction;
        a new key starts ascending.
        """
        if key == self.key and self.direction == SortDirection.asc:
            return SortConfig(key=key, direction=SortDirection.desc)
        return SortConfig(key=key, direction=SortDirection.asc)


class SortSelection(BaseModel):
    key: str
