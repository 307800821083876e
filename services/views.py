# services/views.py

"""
Shared loading helpers for the view routers.

Data-access failures stop here: they become a destructive notification
and an empty result, so the view still renders.
"""

from typing import List, Optional, Tuple, Type

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from core.errors import RepositoryError, describe_repository_error
from core.logging_config import logger
from core.role_filters import visible_properties
from models.enums import Role
from models.property import PropertyRead, UnitRead
from models.tenant import TenantRead
from models.user import User
from services.board import Board
from services.dashboard_session import DashboardSession


def unreadable_rows(session: DashboardSession, title: str, model, error: ValidationError):
    logger.warning(f"Stored {model.__name__} row failed validation: {error}")
    session.notifier.error(title, "Some records could not be read.")


async def fetch_rows(
    session: DashboardSession,
    repo,
    model: Type[BaseModel],
    title: str = "Error loading data",
    **query,
) -> List:
    try:
        rows = await repo.list(**query)
        return [model.model_validate(row) for row in rows]
    except RepositoryError as e:
        session.notifier.error(title, describe_repository_error(e))
    except ValidationError as e:
        unreadable_rows(session, title, model, e)
    return []


async def fetch_one(
    session: DashboardSession,
    repo,
    model: Type[BaseModel],
    record_id: str,
    title: str = "Error loading data",
) -> Tuple[Optional[BaseModel], bool]:
    """Returns (record or None, failed)."""
    try:
        row = await repo.get_by_id(record_id)
        return (model.model_validate(row) if row else None), False
    except RepositoryError as e:
        session.notifier.error(title, describe_repository_error(e))
    except ValidationError as e:
        unreadable_rows(session, title, model, e)
    return None, True


async def load_tenancy_context(session: DashboardSession, user: User):
    """
    The signed-in tenant's own tenancy rows and the units they point at.
    Other roles need neither.
    """
    if user.role != Role.tenant:
        return [], []

    tenancies = await fetch_rows(
        session, session.repos.tenants, TenantRead, filters={"user_id": user.id}
    )
    unit_ids = [t.unit_id for t in tenancies]
    if not unit_ids:
        return tenancies, []

    units = await fetch_rows(
        session, session.repos.units, UnitRead, in_filters={"id": unit_ids}
    )
    return tenancies, units


async def load_visible_properties(
    session: DashboardSession,
    user: User,
    board: Board,
) -> List[PropertyRead]:
    properties = await fetch_rows(
        session,
        session.repos.properties,
        PropertyRead,
        title="Error loading properties",
        order="name",
    )
    tenancies, units = await load_tenancy_context(session, user)
    return visible_properties(
        properties,
        user,
        tenancies=tenancies,
        units=units,
        requests=board.requests,
    )


def missing_information(session: DashboardSession, view: str, missing: List[str]) -> JSONResponse:
    session.notifier.error(
        "Missing Information",
        "Please fill in all required fields.",
    )
    return JSONResponse(
        status_code=400,
        content=session.render(view, missing_fields=missing),
    )


def repository_failure(
    session: DashboardSession,
    view: str,
    title: str,
    error: RepositoryError,
) -> JSONResponse:
    session.notifier.error(title, describe_repository_error(error))
    status_code = 404 if "not found" in error.detail.lower() else 502
    return JSONResponse(status_code=status_code, content=session.render(view))
