from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core.config import settings
from core.errors import AuthenticationError
from core.logging_config import logger
from core.rate_limiter import get_rate_limit_identifier, require_rate_limit
from core.route_guard import LOGIN_PATH, safe_next_path
from dependencies.auth import get_dashboard_session
from models.auth import LoginRequest, SignupRequest
from services.dashboard_session import DashboardSession


router = APIRouter(
    tags=["Auth"],
)


# ============================================================
# LOGIN VIEW
# ============================================================
@router.get("/login", summary="Login view")
async def login_view(
    next: Optional[str] = None,
    session: DashboardSession = Depends(get_dashboard_session),
):
    """
    Already signed-in users are sent straight on to ``next``.
    """
    destination = safe_next_path(next)
    if session.user is not None and not session.manager.loading:
        return RedirectResponse(destination, status_code=303)

    return session.render("login", next=destination)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", summary="Authenticate user")
async def login(
    payload: LoginRequest,
    request: Request,
    session: DashboardSession = Depends(get_dashboard_session),
):
    email = payload.email.strip().lower()

    identifier = get_rate_limit_identifier(request, email=email)
    require_rate_limit(
        request,
        identifier=identifier,
        max_requests=settings.LOGIN_RATE_LIMIT,
        window_seconds=settings.LOGIN_RATE_WINDOW_SECONDS,
    )

    destination = safe_next_path(payload.next)

    try:
        await session.manager.login(email, payload.password)
    except AuthenticationError:
        # Form stays open; the notification carries the reason
        return JSONResponse(
            status_code=401,
            content=session.render("login", next=destination),
        )

    return RedirectResponse(destination, status_code=303)


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", summary="End the dashboard session")
async def logout(session: DashboardSession = Depends(get_dashboard_session)):
    await session.manager.logout()
    return RedirectResponse(LOGIN_PATH, status_code=303)


# ============================================================
# SIGN-UP
# ============================================================
@router.post("/signup", summary="Create an account with a role", status_code=201)
async def signup(
    payload: SignupRequest,
    session: DashboardSession = Depends(get_dashboard_session),
):
    if not payload.name.strip() or not payload.password:
        session.notifier.error("Missing Information", "Please fill in all required fields.")
        return JSONResponse(status_code=400, content=session.render("signup"))

    try:
        await session.manager.sign_up(
            payload.email.strip().lower(),
            payload.password,
            payload.name.strip(),
            payload.role,
        )
    except AuthenticationError:
        return JSONResponse(status_code=400, content=session.render("signup"))

    logger.info(f"Sign-up completed for role {payload.role}")
    return session.render("signup", email=payload.email, role=payload.role.value)


# ============================================================
# CURRENT SESSION
# ============================================================
@router.get("/session", summary="Current dashboard user")
async def current_session(session: DashboardSession = Depends(get_dashboard_session)):
    manager = session.manager
    return session.render(
        "session",
        loading=manager.loading,
        user=manager.user.model_dump(mode="json") if manager.user else None,
    )
