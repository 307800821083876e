# core/session_registry.py

"""
In-memory registry of dashboard sessions, keyed by the session cookie.

Entries expire after a period of inactivity; every lookup slides the
expiry forward. Expired sessions are closed (their Supabase
subscription is released) when they are swept.
"""

import asyncio
import secrets
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Dict, Optional, Tuple

from core.logging_config import logger


class SessionEntry:
    """A dashboard session with its expiration time."""

    def __init__(self, session, ttl_seconds: int):
        self.session = session
        self.ttl_seconds = ttl_seconds
        self.touch()

    def touch(self):
        self.expires_at = datetime.now() + timedelta(seconds=self.ttl_seconds)

    def is_expired(self) -> bool:
        return datetime.now() >= self.expires_at


class SessionRegistry:
    def __init__(self, factory: Callable[[str], Awaitable], ttl_seconds: int = 3600):
        self._factory = factory
        self._ttl_seconds = ttl_seconds
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = asyncio.Lock()

    def get(self, session_id: Optional[str]):
        """Live session for the id, or None. Does not create."""
        if not session_id:
            return None

        entry = self._entries.get(session_id)
        if entry is None or entry.is_expired():
            return None

        entry.touch()
        return entry.session

    async def get_or_create(self, session_id: Optional[str]) -> Tuple[object, bool]:
        """
        Returns (session, created). A new session gets a fresh random id,
        never the one the client supplied.
        """
        existing = self.get(session_id)
        if existing is not None:
            return existing, False

        await self.sweep()

        new_id = secrets.token_urlsafe(32)
        session = await self._factory(new_id)
        await session.manager.initialize()

        async with self._lock:
            self._entries[new_id] = SessionEntry(session, self._ttl_seconds)

        logger.debug(f"Created dashboard session {new_id[:8]}…")
        return session, True

    async def sweep(self):
        """Close and drop every expired session."""
        async with self._lock:
            expired = [sid for sid, entry in self._entries.items() if entry.is_expired()]
            sessions = [self._entries.pop(sid).session for sid in expired]

        for session in sessions:
            await session.close()

        if sessions:
            logger.info(f"Expired {len(sessions)} idle dashboard session(s)")

    async def close_all(self):
        async with self._lock:
            sessions = [entry.session for entry in self._entries.values()]
            self._entries.clear()

        for session in sessions:
            await session.close()

    def __len__(self):
        return len(self._entries)
