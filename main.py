from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.logging_config import logger
from core.route_guard import GuardState
from core.scheduler import start_scheduler
from core.session_registry import SessionRegistry

from dependencies.auth import GuardInterrupt
from routers import ROUTERS
from services.board import Board
from services.dashboard_session import build_supabase_session


# Requests that never need a dashboard session
SESSIONLESS_PATHS = {
    "/health/app",
    "/health/db",
    "/docs",
    "/redoc",
    "/openapi.json",
}

LOADING_RETRY_AFTER_SECONDS = "1"


def describe_routes(app: FastAPI) -> list:
    """
    "METHODS path" for each mounted route. Entries without a path
    (included-router placeholders on newer FastAPI) are skipped.
    """
    lines = []
    for route in app.routes:
        path = getattr(route, "path", None)
        if path is None:
            continue
        methods = ",".join(sorted(getattr(route, "methods", None) or ["WS"]))
        lines.append(f"{methods:10s} {path}")
    return lines


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app(session_factory=None, board: Board = None) -> FastAPI:
    """
    ``session_factory`` builds a DashboardSession for a new session id;
    it defaults to one backed by a fresh Supabase client.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="PropertyPulse API: role-based property management dashboard backed by Supabase",
    )

    app.state.sessions = SessionRegistry(
        session_factory or build_supabase_session,
        ttl_seconds=settings.SESSION_IDLE_TTL_SECONDS,
    )
    app.state.board = board or Board.with_sample_data()

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Dashboard session (cookie → session)
    # -------------------------------------------------
    @app.middleware("http")
    async def attach_dashboard_session(request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in SESSIONLESS_PATHS:
            return await call_next(request)

        registry: SessionRegistry = request.app.state.sessions
        try:
            session, created = await registry.get_or_create(
                request.cookies.get(settings.SESSION_COOKIE_NAME)
            )
        except Exception as e:
            logger.error(f"Could not start dashboard session: {e}", exc_info=True)
            return JSONResponse(
                status_code=503,
                content={"detail": "Session service unavailable"},
            )

        request.state.dashboard_session = session
        response = await call_next(request)

        if created:
            response.set_cookie(
                settings.SESSION_COOKIE_NAME,
                session.session_id,
                max_age=settings.SESSION_IDLE_TTL_SECONDS,
                httponly=True,
                samesite="lax",
                secure=settings.SESSION_COOKIE_SECURE,
            )
        return response

    # -------------------------------------------------
    # Startup / shutdown
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("🚀 Starting PropertyPulse API")
        validate_config_on_startup()
        app.state.scheduler = start_scheduler(app.state.sessions)
        for line in describe_routes(app):
            logger.debug(f"➡️ {line}")

    @app.on_event("shutdown")
    async def on_shutdown():
        app.state.scheduler.shutdown(wait=False)
        await app.state.sessions.close_all()
        logger.info("Dashboard sessions closed")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(GuardInterrupt)
    async def handle_guard(request: Request, exc: GuardInterrupt):
        decision = exc.decision
        if decision.state == GuardState.loading:
            return JSONResponse(
                status_code=503,
                content=decision.as_dict(),
                headers={"Retry-After": LOADING_RETRY_AFTER_SECONDS},
            )
        return RedirectResponse(decision.redirect_to, status_code=303)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 429, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers (catch-all pages router last)
    # -------------------------------------------------
    for router in ROUTERS:
        app.include_router(router)

    return app


# Create the global FastAPI instance
app = create_app()
