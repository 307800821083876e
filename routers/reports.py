# routers/reports.py

from fastapi import APIRouter, Depends

from core.calculations import occupancy_by_property, summarize_financials
from core.role_filters import visible_financial_records
from dependencies.auth import get_dashboard_session, require_view
from dependencies.board import get_board
from models.property import UnitRead
from models.user import User
from services.board import Board
from services.dashboard_session import DashboardSession
from services.views import fetch_rows, load_visible_properties


router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)


@router.get("", summary="Financial summary and occupancy")
async def financial_reports(
    user: User = Depends(require_view("reports")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    records = visible_financial_records(board.financial_records, user)

    properties = await load_visible_properties(session, user, board)
    units = []
    if properties:
        units = await fetch_rows(
            session,
            session.repos.units,
            UnitRead,
            title="Error loading units",
            in_filters={"property_id": [p.id for p in properties]},
        )

    return session.render(
        "reports",
        summary=summarize_financials(records),
        occupancy=occupancy_by_property(properties, units),
        records=[r.model_dump(mode="json") for r in records],
    )
