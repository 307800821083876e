# routers/properties.py

from collections import Counter

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse

from core.calculations import occupancy_by_property, occupancy_rate
from core.errors import RepositoryError
from core.logging_config import logger
from core.role_filters import visible_properties, visible_tenants, visible_units
from core.utils import blank_fields
from dependencies.auth import get_dashboard_session, require_view
from dependencies.board import get_board
from models.property import (
    PropertyCreate,
    PropertyRead,
    PropertyUpdate,
    UnitCreate,
    UnitRead,
    UnitUpdate,
)
from models.tenant import TenantCreate, TenantRead
from models.user import User
from services.board import Board
from services.dashboard_session import DashboardSession
from services.views import (
    fetch_one,
    fetch_rows,
    load_tenancy_context,
    load_visible_properties,
    missing_information,
    repository_failure,
)


router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
)

PROPERTIES_PATH = "/properties"


def property_not_found(session: DashboardSession) -> RedirectResponse:
    session.notifier.error(
        "Property not found",
        "The requested property could not be found.",
    )
    return RedirectResponse(PROPERTIES_PATH, status_code=303)


async def visible_property(session, user, board, property_id: str):
    """
    (property, failed). A property outside the user's visible set is
    reported exactly like a missing one.
    """
    prop, failed = await fetch_one(
        session, session.repos.properties, PropertyRead, property_id,
        title="Error loading property",
    )
    if prop is None:
        return None, failed

    tenancies, units = await load_tenancy_context(session, user)
    visible = visible_properties(
        [prop], user, tenancies=tenancies, units=units, requests=board.requests
    )
    return (visible[0] if visible else None), False


# -------------------------------------------------------------
# LIST Properties
# -------------------------------------------------------------
@router.get("", summary="List properties visible to the user")
async def list_properties(
    user: User = Depends(require_view("properties")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
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
    occupancy = {row["property_id"]: row["occupancy"] for row in occupancy_by_property(properties, units)}

    return session.render(
        "properties",
        properties=[
            {**p.model_dump(mode="json"), "occupancy_rate": occupancy.get(p.id, 0.0)}
            for p in properties
        ],
    )


# -------------------------------------------------------------
# CREATE Property
# -------------------------------------------------------------
@router.post("", summary="Create property", status_code=201)
async def create_property(
    payload: PropertyCreate,
    user: User = Depends(require_view("property_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    data = payload.model_dump()
    missing = blank_fields(data, ["name", "address"])
    if missing:
        return missing_information(session, "properties", missing)

    try:
        row = await session.repos.properties.create({**data, "created_by": user.id})
    except RepositoryError as e:
        return repository_failure(session, "properties", "Error creating property", e)

    created = PropertyRead.model_validate(row)
    logger.info(f"Property {created.id} created by {user.id}")
    session.notifier.notify("Property added", f"{created.name} has been added.")
    return session.render("properties", property=created.model_dump(mode="json"))


# -------------------------------------------------------------
# GET Property details
# -------------------------------------------------------------
@router.get("/{property_id}", summary="Property with units and tenants")
async def property_details(
    property_id: str,
    user: User = Depends(require_view("property_details")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    prop, failed = await visible_property(session, user, board, property_id)
    if failed:
        return session.render("property_details", property=None, units=[], tenants=[])
    if prop is None:
        return property_not_found(session)

    tenancies, _ = await load_tenancy_context(session, user)
    units = await fetch_rows(
        session,
        session.repos.units,
        UnitRead,
        title="Error loading units",
        filters={"property_id": property_id},
        order="unit_number",
    )
    units = visible_units(units, user, tenancies=tenancies, requests=board.requests)

    tenants = []
    if units:
        tenants = await fetch_rows(
            session,
            session.repos.tenants,
            TenantRead,
            title="Error loading tenants",
            in_filters={"unit_id": [u.id for u in units]},
        )
    tenants = visible_tenants(tenants, user)
    tenant_counts = Counter(t.unit_id for t in tenants)

    return session.render(
        "property_details",
        property=prop.model_dump(mode="json"),
        units=[
            {**u.model_dump(mode="json"), "tenant_count": tenant_counts.get(u.id, 0)}
            for u in units
        ],
        tenants=[t.model_dump(mode="json") for t in tenants],
        occupancy_rate=occupancy_rate(units),
        occupied_units=sum(1 for u in units if u.status == "occupied"),
    )


# -------------------------------------------------------------
# UPDATE Property
# -------------------------------------------------------------
@router.patch("/{property_id}", summary="Update property")
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    user: User = Depends(require_view("property_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        return session.render("property_details")

    try:
        row = await session.repos.properties.update(property_id, changes)
    except RepositoryError as e:
        return repository_failure(session, "property_details", "Error updating property", e)

    session.notifier.notify("Property updated")
    return session.render("property_details", property=PropertyRead.model_validate(row).model_dump(mode="json"))


# -------------------------------------------------------------
# DELETE Property
# -------------------------------------------------------------
@router.delete("/{property_id}", summary="Delete property")
async def delete_property(
    property_id: str,
    user: User = Depends(require_view("property_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    try:
        await session.repos.properties.delete(property_id)
    except RepositoryError as e:
        return repository_failure(session, "properties", "Error deleting property", e)

    logger.info(f"Property {property_id} deleted by {user.id}")
    session.notifier.notify("Property deleted")
    return RedirectResponse(PROPERTIES_PATH, status_code=303)


# =============================================================
# UNITS
# =============================================================
@router.post("/{property_id}/units", summary="Add a unit to a property", status_code=201)
async def create_unit(
    property_id: str,
    payload: UnitCreate,
    user: User = Depends(require_view("unit_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    data = payload.model_dump(mode="json")
    missing = blank_fields(data, ["unit_number"])
    if missing:
        return missing_information(session, "property_details", missing)

    # Capacity and unit-number uniqueness are left to the database
    try:
        row = await session.repos.units.create({**data, "property_id": property_id})
    except RepositoryError as e:
        return repository_failure(session, "property_details", "Error adding unit", e)

    unit = UnitRead.model_validate(row)
    session.notifier.notify("Unit added", f"Unit {unit.unit_number} has been added.")
    return session.render("property_details", unit=unit.model_dump(mode="json"))


async def unit_in_property(session, property_id: str, unit_id: str):
    unit, failed = await fetch_one(
        session, session.repos.units, UnitRead, unit_id, title="Error loading unit"
    )
    if unit is not None and unit.property_id != property_id:
        return None, failed
    return unit, failed


async def writable_unit(session, view: str, property_id: str, unit_id: str):
    """
    (unit, error response). Writes under a unit that does not belong to
    the property in the path are refused without touching the unit.
    """
    unit, failed = await unit_in_property(session, property_id, unit_id)
    if failed:
        return None, JSONResponse(status_code=502, content=session.render(view))
    if unit is None:
        session.notifier.error("Unit not found", "The requested unit could not be found.")
        return None, JSONResponse(status_code=404, content=session.render(view))
    return unit, None


@router.get("/{property_id}/units/{unit_id}", summary="Unit with its tenants")
async def unit_details(
    property_id: str,
    unit_id: str,
    user: User = Depends(require_view("unit_details")),
    session: DashboardSession = Depends(get_dashboard_session),
    board: Board = Depends(get_board),
):
    prop, failed = await visible_property(session, user, board, property_id)
    if failed:
        return session.render("unit_details", property=None, unit=None, tenants=[])
    if prop is None:
        return property_not_found(session)

    unit, failed = await unit_in_property(session, property_id, unit_id)
    if failed:
        return session.render("unit_details", property=prop.model_dump(mode="json"), unit=None, tenants=[])

    tenancies, _ = await load_tenancy_context(session, user)
    if unit is None or not visible_units([unit], user, tenancies=tenancies, requests=board.requests):
        session.notifier.error("Unit not found", "The requested unit could not be found.")
        return RedirectResponse(f"{PROPERTIES_PATH}/{property_id}", status_code=303)

    tenants = await fetch_rows(
        session,
        session.repos.tenants,
        TenantRead,
        title="Error loading tenants",
        filters={"unit_id": unit_id},
    )

    return session.render(
        "unit_details",
        property=prop.model_dump(mode="json"),
        unit=unit.model_dump(mode="json"),
        tenants=[t.model_dump(mode="json") for t in visible_tenants(tenants, user)],
    )


@router.patch("/{property_id}/units/{unit_id}", summary="Update a unit (status, details)")
async def update_unit(
    property_id: str,
    unit_id: str,
    payload: UnitUpdate,
    user: User = Depends(require_view("unit_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    # Any status may follow any other
    changes = payload.model_dump(mode="json", exclude_unset=True)
    if not changes:
        return session.render("unit_details")

    _, refused = await writable_unit(session, "unit_details", property_id, unit_id)
    if refused is not None:
        return refused

    try:
        row = await session.repos.units.update(unit_id, changes)
    except RepositoryError as e:
        return repository_failure(session, "unit_details", "Error updating unit", e)

    unit = UnitRead.model_validate(row)
    session.notifier.notify("Unit updated", f"Unit {unit.unit_number} is now {unit.status.value}.")
    return session.render("unit_details", unit=unit.model_dump(mode="json"))


# =============================================================
# TENANTS (under a unit)
# =============================================================
@router.post("/{property_id}/units/{unit_id}/tenants", summary="Add a tenant to a unit", status_code=201)
async def create_tenant(
    property_id: str,
    unit_id: str,
    payload: TenantCreate,
    user: User = Depends(require_view("tenant_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    data = payload.model_dump(mode="json")
    missing = blank_fields(data, ["name"])
    if missing:
        return missing_information(session, "unit_details", missing)

    _, refused = await writable_unit(session, "unit_details", property_id, unit_id)
    if refused is not None:
        return refused

    # Single primary tenant per unit is not checked here
    try:
        row = await session.repos.tenants.create({**data, "unit_id": unit_id})
    except RepositoryError as e:
        return repository_failure(session, "unit_details", "Error adding tenant", e)

    tenant = TenantRead.model_validate(row)
    session.notifier.notify("Tenant added", f"{tenant.name} has been added to the unit.")
    return session.render("unit_details", tenant=tenant.model_dump(mode="json"))
