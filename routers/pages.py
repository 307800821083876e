# routers/pages.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.logging_config import logger
from dependencies.auth import get_dashboard_session, require_view
from models.user import User
from services.dashboard_session import DashboardSession


router = APIRouter(
    tags=["Pages"],
)


@router.get("/unauthorized", summary="Role not permitted for the requested view")
async def unauthorized(
    user: User = Depends(require_view("unauthorized")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    return session.render(
        "unauthorized",
        role=user.role.value,
        message=f"Your current role is {user.role.display_name}.",
    )


# Registered last: any GET no other router claims
@router.get("/{path:path}", include_in_schema=False)
async def not_found(
    path: str,
    request: Request,
    session: DashboardSession = Depends(get_dashboard_session),
):
    logger.warning(f"404: no view for {request.url.path}")
    return JSONResponse(
        status_code=404,
        content=session.render("not_found", path=request.url.path),
    )
