from fastapi import Depends, Request

from core.logging_config import logger
from core.roles import VIEW_ROLES
from core.route_guard import GuardDecision, GuardState, evaluate_access
from models.user import User
from services.dashboard_session import DashboardSession


# ============================================================
# Dashboard session (attached by the session middleware)
# ============================================================
def get_dashboard_session(request: Request) -> DashboardSession:
    return request.state.dashboard_session


# ============================================================
# Guard outcome that is not "render the view"
# ============================================================
class GuardInterrupt(Exception):
    """Raised by view dependencies; main.py turns it into a redirect or 503."""

    def __init__(self, decision: GuardDecision):
        self.decision = decision
        super().__init__(decision.state.value)


def requested_path(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


# ============================================================
# VIEW GUARD (per-view role allow-list)
# ============================================================
def require_view(view: str):
    """
    Usage:
        @router.get("/reports")
        async def reports(user: User = Depends(require_view("reports"))): ...
    """
    permitted_roles = VIEW_ROLES[view]

    def guard(
        request: Request,
        session: DashboardSession = Depends(get_dashboard_session),
    ) -> User:
        manager = session.manager
        decision = evaluate_access(
            manager.loading,
            manager.user,
            permitted_roles,
            requested_path(request),
        )

        if decision.state != GuardState.authorized:
            logger.debug(f"Guard {decision.state} for {request.url.path} ({view})")
            raise GuardInterrupt(decision)

        return manager.user

    return guard
