# services/dashboard_session.py

from core.supabase_client import create_session_client
from models.maintenance import SortConfig
from services.notifications import Notifier
from services.repository import Repositories
from services.session_manager import AuthSessionManager


class DashboardSession:
    """
    Everything one browser's dashboard needs, constructed explicitly and
    passed to the views that use it: the session manager (single writer
    of the current user), the repositories bound to the same Supabase
    client, the notification queue and the maintenance list's sort state.
    """

    def __init__(self, session_id: str, manager: AuthSessionManager, repos, notifier: Notifier):
        self.session_id = session_id
        self.manager = manager
        self.repos = repos
        self.notifier = notifier
        self.maintenance_sort = SortConfig()

    @property
    def user(self):
        return self.manager.user

    def render(self, view: str, **payload) -> dict:
        """View response body; drains pending notifications into it."""
        return {
            "view": view,
            **payload,
            "notifications": [n.model_dump(mode="json") for n in self.notifier.drain()],
        }

    async def close(self):
        await self.manager.close()


async def build_supabase_session(session_id: str) -> DashboardSession:
    """Default factory: a fresh anon-key Supabase client per dashboard session."""
    client = await create_session_client()
    notifier = Notifier()
    repos = Repositories(client)
    manager = AuthSessionManager(client.auth, repos.profiles, notifier)
    return DashboardSession(session_id, manager, repos, notifier)
