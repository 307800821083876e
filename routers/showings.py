# routers/showings.py

from fastapi import APIRouter, Depends

from core.role_filters import visible_showings
from dependencies.auth import get_dashboard_session, require_view
from dependencies.board import get_board
from models.user import User
from services.board import Board
from services.dashboard_session import DashboardSession


router = APIRouter(
    prefix="/showings",
    tags=["Showings"],
)


@router.get("", summary="Scheduled unit showings")
async def list_showings(
    user: User = Depends(require_view("showings")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    showings = sorted(visible_showings(board.showings, user), key=lambda s: (s.date, s.time))
    return session.render(
        "showings",
        showings=[s.model_dump(mode="json") for s in showings],
    )
