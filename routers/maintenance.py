# routers/maintenance.py

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.logging_config import logger
from core.role_filters import (
    SORT_KEY_ALIASES,
    filter_by_status,
    sort_maintenance_requests,
    visible_maintenance_requests,
)
from core.utils import blank_fields
from dependencies.auth import get_dashboard_session, require_view
from dependencies.board import get_board
from models.enums import MaintenanceStatus, Role
from models.maintenance import (
    AssignRequest,
    CommentCreate,
    MaintenanceRequest,
    MaintenanceRequestCreate,
    SortSelection,
)
from models.user import User
from services.board import Board, BoardError
from services.dashboard_session import DashboardSession
from services.views import load_tenancy_context, missing_information


router = APIRouter(
    prefix="/maintenance",
    tags=["Maintenance"],
)

SORTABLE_KEYS = set(MaintenanceRequest.model_fields) - {"images", "comments"}


def render_list(session: DashboardSession, user: User, board: Board, status: Optional[str] = None) -> dict:
    requests = visible_maintenance_requests(board.requests, user)
    requests = filter_by_status(requests, status)
    requests = sort_maintenance_requests(requests, session.maintenance_sort)
    return session.render(
        "maintenance",
        status=status or "all",
        sort=session.maintenance_sort.model_dump(mode="json"),
        requests=[r.model_dump(mode="json") for r in requests],
    )


def visible_request(board: Board, user: User, request_id: str) -> Optional[MaintenanceRequest]:
    request = board.get_request(request_id)
    if request is None or not visible_maintenance_requests([request], user):
        return None
    return request


def request_not_found(session: DashboardSession) -> JSONResponse:
    session.notifier.error("Request not found", "The maintenance request could not be found.")
    return JSONResponse(status_code=404, content=session.render("maintenance"))


def action_rejected(session: DashboardSession, error: BoardError) -> JSONResponse:
    logger.warning(f"Maintenance action rejected: {error}")
    session.notifier.error("Action not allowed", str(error))
    return JSONResponse(status_code=409, content=session.render("maintenance"))


# -------------------------------------------------------------
# LIST
# -------------------------------------------------------------
@router.get("", summary="Maintenance requests visible to the user")
async def list_requests(
    status: Optional[str] = None,
    user: User = Depends(require_view("maintenance")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    if status and status != "all" and status not in MaintenanceStatus.list():
        session.notifier.error("Invalid status", f"Unknown status filter '{status}'.")
        return JSONResponse(status_code=400, content=session.render("maintenance"))

    return render_list(session, user, board, status)


# -------------------------------------------------------------
# SORT (per-session state)
# -------------------------------------------------------------
@router.post("/sort", summary="Select a sort column")
async def select_sort(
    payload: SortSelection,
    user: User = Depends(require_view("maintenance")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    key = SORT_KEY_ALIASES.get(payload.key, payload.key)
    if key not in SORTABLE_KEYS:
        session.notifier.error("Invalid sort", f"Cannot sort by '{payload.key}'.")
        return JSONResponse(status_code=400, content=session.render("maintenance"))

    session.maintenance_sort = session.maintenance_sort.toggle(key)
    return render_list(session, user, board)


# -------------------------------------------------------------
# CREATE
# -------------------------------------------------------------
@router.post("", summary="Submit a maintenance request", status_code=201)
async def create_request(
    payload: MaintenanceRequestCreate,
    user: User = Depends(require_view("maintenance_create")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    data = payload.model_dump()

    if user.role == Role.tenant and not (data["property_id"] and data["unit_number"]):
        # Tenants file against their own unit
        tenancies, units = await load_tenancy_context(session, user)
        if units:
            data["property_id"] = data["property_id"] or units[0].property_id
            data["unit_number"] = data["unit_number"] or units[0].unit_number

    missing = blank_fields(data, ["title", "description", "property_id", "unit_number"])
    if missing:
        return missing_information(session, "maintenance", missing)

    request = board.create_request(data, user)
    session.notifier.notify(
        "Request submitted",
        f"Maintenance request '{request.title}' has been submitted.",
    )
    return session.render("maintenance", request=request.model_dump(mode="json"))


# -------------------------------------------------------------
# ACTIONS
# -------------------------------------------------------------
@router.post("/{request_id}/accept", summary="Take a pending request")
async def accept_request(
    request_id: str,
    user: User = Depends(require_view("maintenance_work")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    request = visible_request(board, user, request_id)
    if request is None:
        return request_not_found(session)

    try:
        updated = board.accept(request, user)
    except BoardError as e:
        return action_rejected(session, e)

    session.notifier.notify("Request accepted", f"'{updated.title}' is now in progress.")
    return session.render("maintenance", request=updated.model_dump(mode="json"))


@router.post("/{request_id}/complete", summary="Mark an in-progress request completed")
async def complete_request(
    request_id: str,
    user: User = Depends(require_view("maintenance_work")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    request = visible_request(board, user, request_id)
    if request is None:
        return request_not_found(session)
    if request.assigned_to != user.id:
        return action_rejected(session, BoardError(f"Request {request.id} is not assigned to you"))

    try:
        updated = board.complete(request)
    except BoardError as e:
        return action_rejected(session, e)

    session.notifier.notify("Request completed", f"'{updated.title}' has been completed.")
    return session.render("maintenance", request=updated.model_dump(mode="json"))


@router.post("/{request_id}/assign", summary="Assign a pending request")
async def assign_request(
    request_id: str,
    payload: AssignRequest,
    user: User = Depends(require_view("maintenance_assign")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    if not payload.assigned_to.strip():
        return missing_information(session, "maintenance", ["assigned_to"])

    request = visible_request(board, user, request_id)
    if request is None:
        return request_not_found(session)

    try:
        updated = board.assign(request, payload.assigned_to.strip())
    except BoardError as e:
        return action_rejected(session, e)

    session.notifier.notify("Request assigned")
    return session.render("maintenance", request=updated.model_dump(mode="json"))


@router.post("/{request_id}/cancel", summary="Cancel a pending request")
async def cancel_request(
    request_id: str,
    user: User = Depends(require_view("maintenance_cancel")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    request = visible_request(board, user, request_id)
    if request is None:
        return request_not_found(session)

    try:
        updated = board.cancel(request)
    except BoardError as e:
        return action_rejected(session, e)

    session.notifier.notify("Request cancelled")
    return session.render("maintenance", request=updated.model_dump(mode="json"))


@router.post("/{request_id}/comments", summary="Comment on a request", status_code=201)
async def add_comment(
    request_id: str,
    payload: CommentCreate,
    user: User = Depends(require_view("maintenance_comment")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    if not payload.text.strip():
        return missing_information(session, "maintenance", ["text"])

    request = visible_request(board, user, request_id)
    if request is None:
        return request_not_found(session)

    updated = board.add_comment(request, payload.text.strip(), user)
    return session.render("maintenance", request=updated.model_dump(mode="json"))
