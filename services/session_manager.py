# services/session_manager.py

"""
Auth Session Manager.

Single writer of "who is logged in" for one dashboard session, kept
consistent with the Supabase Auth client it was built around. Readers
(the route guard, the session WebSocket) observe it through ``on_change``.
"""

import asyncio
from typing import Callable, List, Optional, Set

from core.errors import AuthenticationError, RepositoryError, extract_supabase_error
from core.logging_config import logger
from models.enums import Role
from models.user import User
from services.notifications import Notifier
from services.repository import TableRepository


SIGNED_OUT_EVENTS = {"SIGNED_OUT", "USER_DELETED"}

_UNCHANGED = object()


def coerce_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        logger.warning(f"Unknown role {value!r}; falling back to potential_tenant")
        return Role.potential_tenant


class AuthSessionManager:
    def __init__(self, auth, profiles: TableRepository, notifier: Notifier):
        self.auth = auth
        self.profiles = profiles
        self.notifier = notifier

        self._user: Optional[User] = None
        self._session = None
        self._loading = True
        self._initialized = False
        self._subscription = None
        self._listeners: List[Callable[[], None]] = []
        self._profile_tasks: Set[asyncio.Task] = set()

    # -------------------------------------------------
    # Read side
    # -------------------------------------------------
    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def session(self):
        return self._session

    def on_change(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call ``listener`` whenever the user or the loading flag changes."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, *, user=_UNCHANGED, loading=_UNCHANGED):
        changed = False
        if user is not _UNCHANGED and user != self._user:
            self._user = user
            changed = True
        if loading is not _UNCHANGED and loading != self._loading:
            self._loading = loading
            changed = True

        if not changed:
            return

        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Session change listener failed")

    # -------------------------------------------------
    # Start-up
    # -------------------------------------------------
    async def initialize(self):
        if self._initialized:
            return
        self._initialized = True

        # Subscribe first so an event fired during get_session is not missed
        self.subscribe_to_session_changes()

        try:
            session = await self.auth.get_session()
            if session and session.user:
                self._session = session
                user = await self._fetch_user(session)
                if self._session is session:
                    self._set_state(user=user)
        except Exception as e:
            logger.error(f"Initial session check failed: {extract_supabase_error(e)}")
            self.notifier.error("Session check failed", "Please sign in again.")
        finally:
            self._set_state(loading=False)

    def subscribe_to_session_changes(self):
        if self._subscription is None:
            self._subscription = self.auth.on_auth_state_change(self._handle_auth_event)

    # -------------------------------------------------
    # Session Store callback
    # -------------------------------------------------
    def _handle_auth_event(self, event, session):
        logger.info(f"Auth event: {event}")

        if event in SIGNED_OUT_EVENTS or session is None or session.user is None:
            self._clear()
            return

        self._session = session
        if self._user is None or self._user.id != session.user.id:
            self._set_state(user=None, loading=True)
        self._schedule_profile_fetch(session)

    def _schedule_profile_fetch(self, session):
        # This runs inside the Session Store's own notification call.
        # Awaiting the profiles table here would re-enter the client
        # mid-callback, so the fetch becomes a task whose first step
        # runs on the event loop's next turn.
        task = asyncio.get_running_loop().create_task(self._load_profile(session))
        self._profile_tasks.add(task)
        task.add_done_callback(self._profile_tasks.discard)

    async def _load_profile(self, session):
        user = await self._fetch_user(session)

        # Superseded by a later event (sign-out, another sign-in)
        if self._session is not session:
            return

        self._set_state(user=user, loading=False)

    async def _fetch_user(self, session) -> User:
        auth_user = session.user
        metadata = auth_user.user_metadata or {}

        row = None
        try:
            row = await self.profiles.get_by_id(auth_user.id)
        except RepositoryError:
            self.notifier.error(
                "Could not load your profile",
                "Using your account details instead.",
            )
        row = row or {}

        return User(
            id=auth_user.id,
            email=row.get("email") or auth_user.email or "",
            name=row.get("name") or metadata.get("name") or auth_user.email or "",
            role=coerce_role(row.get("role") or metadata.get("role")),
        )

    def _clear(self):
        self._session = None
        for task in list(self._profile_tasks):
            task.cancel()
        self._set_state(user=None, loading=False)

    # -------------------------------------------------
    # LOGIN
    # -------------------------------------------------
    async def login(self, email: str, password: str) -> User:
        self._set_state(loading=True)

        try:
            response = await self.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
            session = response.session
            if not session or not session.user:
                raise AuthenticationError("Invalid email or password")

            self._session = session
            user = await self._fetch_user(session)

        except Exception as e:
            message = extract_supabase_error(e) or "Invalid email or password"
            logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
            self._set_state(loading=False)
            self.notifier.error("Login failed", message)
            raise AuthenticationError(message) from e

        if self._session is session:
            self._set_state(user=user, loading=False)
        else:
            self._set_state(loading=False)

        logger.info(f"User {user.id} signed in as {user.role}")
        self.notifier.notify("Login successful", f"Welcome back, {user.name}!")
        return user

    # -------------------------------------------------
    # LOGOUT
    # -------------------------------------------------
    async def logout(self):
        """
        Local state is cleared whether or not the remote sign-out
        succeeds; the remote call is best-effort.
        """
        remote_error = None
        try:
            await self.auth.sign_out()
        except Exception as e:
            remote_error = extract_supabase_error(e)
            logger.warning(f"Remote sign-out failed: {remote_error}")

        self._clear()

        if remote_error:
            self.notifier.error(
                "Logged out locally",
                "The server could not end your session; it will expire on its own.",
            )
        else:
            self.notifier.notify(
                "Logged out successfully",
                "You have been logged out of your account.",
            )

    # -------------------------------------------------
    # SIGN-UP
    # -------------------------------------------------
    async def sign_up(self, email: str, password: str, name: str, role: Role):
        """
        The profiles row is materialized server-side from the
        {name, role} metadata.
        """
        try:
            await self.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name, "role": Role(role).value}},
                }
            )
        except Exception as e:
            message = extract_supabase_error(e)
            logger.warning(f"Sign-up failed for {email}: {message}")
            self.notifier.error("Sign-up failed", message)
            raise AuthenticationError(message) from e

        logger.info(f"Created account for {email} with role {role}")
        self.notifier.notify("Account created", f"Welcome, {name}!")

    # -------------------------------------------------
    # Teardown
    # -------------------------------------------------
    async def close(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._profile_tasks):
            task.cancel()

        # Observers see the session end before they are dropped
        self._set_state(user=None, loading=False)
        self._listeners.clear()
