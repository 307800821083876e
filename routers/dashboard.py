# routers/dashboard.py

from fastapi import APIRouter, Depends

from core.calculations import summarize_financials
from core.role_filters import (
    visible_financial_records,
    visible_maintenance_requests,
    visible_showings,
)
from core.roles import nav_items_for, portal_title
from dependencies.auth import get_dashboard_session, require_view
from dependencies.board import get_board
from models.enums import MaintenancePriority, MaintenanceStatus, Role
from models.user import User
from services.board import Board
from services.dashboard_session import DashboardSession
from services.views import load_visible_properties


router = APIRouter(
    tags=["Dashboard"],
)

OPEN_STATUSES = (MaintenanceStatus.pending, MaintenanceStatus.in_progress)


# -------------------------------------------------------------
# Recent activity feed, per role
# -------------------------------------------------------------
def recent_activities(user: User, board: Board, property_names: dict) -> list:
    role = user.role

    if role == Role.investor:
        return [
            {
                "id": record.id,
                "title": f"{'Income' if record.type == 'income' else 'Expense'}: {record.description}",
                "date": record.date.isoformat(),
                "amount": record.amount,
                "type": record.type.value,
            }
            for record in visible_financial_records(board.financial_records, user)[:5]
        ]

    if role == Role.property_manager:
        requests = [
            {
                "id": req.id,
                "title": f"Maintenance Request: {req.title}",
                "date": req.created_at.date().isoformat(),
                "status": req.status.value,
                "type": "maintenance",
            }
            for req in board.requests[:2]
        ]
        showings = [
            {
                "id": show.id,
                "title": f"Showing: {property_names.get(show.property_id, show.property_id)} Unit {show.unit_number}",
                "date": show.date.isoformat(),
                "prospect": show.prospect_name,
                "type": "showing",
            }
            for show in visible_showings(board.showings, user)[:2]
        ]
        return requests + showings

    if role == Role.tenant:
        return [
            {
                "id": req.id,
                "title": f"Maintenance: {req.title}",
                "date": req.created_at.date().isoformat(),
                "status": req.status.value,
                "type": "maintenance",
            }
            for req in visible_maintenance_requests(board.requests, user)
        ]

    if role == Role.maintenance:
        return [
            {
                "id": req.id,
                "title": req.title,
                "property": property_names.get(req.property_id),
                "unit": req.unit_number,
                "priority": req.priority.value,
                "type": "maintenance",
            }
            for req in visible_maintenance_requests(board.requests, user)
        ]

    if role == Role.potential_tenant:
        return [
            {
                "id": show.id,
                "title": f"Showing: Unit {show.unit_number}",
                "date": show.date.isoformat(),
                "status": show.status.value,
                "type": "showing",
            }
            for show in visible_showings(board.showings, user)
        ]

    raise ValueError(f"Unhandled role: {role!r}")


# -------------------------------------------------------------
# Headline numbers, per role
# -------------------------------------------------------------
def overview_stats(user: User, board: Board, properties: list) -> list:
    role = user.role
    requests = visible_maintenance_requests(board.requests, user)
    open_requests = [r for r in requests if r.status in OPEN_STATUSES]

    if role == Role.investor:
        summary = summarize_financials(visible_financial_records(board.financial_records, user))
        return [
            {"title": "Total Properties", "value": len(properties)},
            {"title": "Monthly Income", "value": summary["total_income"]},
            {"title": "Monthly Expenses", "value": summary["total_expenses"]},
            {"title": "Net Income", "value": summary["net_income"]},
        ]

    if role == Role.property_manager:
        return [
            {"title": "Properties", "value": len(properties)},
            {"title": "Maintenance Requests", "value": len(open_requests)},
            {
                "title": "Upcoming Showings",
                "value": sum(1 for s in visible_showings(board.showings, user) if s.status == "scheduled"),
            },
        ]

    if role == Role.tenant:
        return [
            {"title": "Open Maintenance Requests", "value": len(open_requests)},
        ]

    if role == Role.maintenance:
        assigned = [r for r in open_requests if r.assigned_to == user.id]
        return [
            {"title": "Assigned Tasks", "value": len(assigned)},
            {
                "title": "High Priority",
                "value": sum(
                    1 for r in open_requests
                    if r.priority in (MaintenancePriority.high, MaintenancePriority.emergency)
                ),
            },
        ]

    if role == Role.potential_tenant:
        return [
            {"title": "Showings", "value": len(visible_showings(board.showings, user))},
        ]

    raise ValueError(f"Unhandled role: {role!r}")


# -------------------------------------------------------------
# GET /
# -------------------------------------------------------------
@router.get("/", summary="Role dashboard")
async def dashboard(
    user: User = Depends(require_view("dashboard")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    properties = await load_visible_properties(session, user, board)
    property_names = {p.id: p.name for p in properties}

    return session.render(
        "dashboard",
        user=user.model_dump(mode="json"),
        portal=portal_title(user.role),
        navigation=nav_items_for(user.role),
        stats=overview_stats(user, board, properties),
        properties=[p.model_dump(mode="json") for p in properties],
        activities=recent_activities(user, board, property_names),
    )
