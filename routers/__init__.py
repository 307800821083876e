# routers/__init__.py

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .properties import router as properties_router
from .tenants import router as tenants_router
from .maintenance import router as maintenance_router
from .reports import router as reports_router
from .showings import router as showings_router
from .session_events import router as session_events_router
from .health import router as health_router
from .pages import router as pages_router


# Order matters: pages carries the catch-all and must come last
ROUTERS = [
    auth_router,
    dashboard_router,
    properties_router,
    tenants_router,
    maintenance_router,
    reports_router,
    showings_router,
    session_events_router,
    health_router,
    pages_router,
]

__all__ = ["ROUTERS"]
