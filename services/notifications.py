# services/notifications.py

from collections import deque
from typing import List, Optional

from models.enums import NotificationVariant
from models.notification import Notification


class Notifier:
    """
    Per-session queue of user-visible notifications.
    Views drain it into their response; the oldest entries fall off
    once the queue is full.
    """

    def __init__(self, max_pending: int = 20):
        self._pending = deque(maxlen=max_pending)

    def notify(self, title: str, description: Optional[str] = None):
        self._pending.append(Notification(title=title, description=description))

    def error(self, title: str, description: Optional[str] = None):
        self._pending.append(
            Notification(
                title=title,
                description=description,
                variant=NotificationVariant.destructive,
            )
        )

    def drain(self) -> List[Notification]:
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def __len__(self):
        return len(self._pending)
