from typing import Optional
from pydantic import BaseModel

from models.enums import NotificationVariant


class Notification(BaseModel):
    """A dismissable, user-visible message (the dashboard's toast)."""
    title: str
    description: Optional[str] = None
    variant: NotificationVariant = NotificationVariant.default
