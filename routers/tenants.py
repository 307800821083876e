# routers/tenants.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.calculations import calculate_new_rent
from core.errors import RepositoryError
from core.logging_config import logger
from dependencies.auth import get_dashboard_session, require_view
from models.tenant import RentCalculation, TenantRead, TenantUpdate
from models.user import User
from services.dashboard_session import DashboardSession
from services.views import fetch_one, repository_failure


router = APIRouter(
    tags=["Tenants"],
)


def invalid_amount(session: DashboardSession, view: str) -> JSONResponse:
    session.notifier.error("Invalid Amount", "The new rent is too large to calculate.")
    return JSONResponse(status_code=400, content=session.render(view))


# -------------------------------------------------------------
# UPDATE Tenant
# -------------------------------------------------------------
@router.patch("/tenants/{tenant_id}", summary="Update tenant details")
async def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    user: User = Depends(require_view("tenant_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    if not changes:
        return session.render("unit_details")

    try:
        row = await session.repos.tenants.update(tenant_id, changes)
    except RepositoryError as e:
        return repository_failure(session, "unit_details", "Error updating tenant", e)

    tenant = TenantRead.model_validate(row)
    session.notifier.notify("Tenant updated")
    return session.render("unit_details", tenant=tenant.model_dump(mode="json"))


# -------------------------------------------------------------
# RENT CALCULATOR (preview only)
# -------------------------------------------------------------
@router.post("/rent/calculate", summary="Preview a rent increase")
async def preview_rent(
    payload: RentCalculation,
    user: User = Depends(require_view("tenant_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    try:
        new_rent = calculate_new_rent(
            payload.current_rent or 0,
            payload.calculation_type,
            payload.percentage_increase,
            payload.fixed_increase,
        )
    except ValueError:
        return invalid_amount(session, "rent_calculator")
    return session.render("rent_calculator", new_rent=f"{new_rent:.2f}")


# -------------------------------------------------------------
# APPLY rent increase to a tenant
# -------------------------------------------------------------
@router.post("/tenants/{tenant_id}/rent", summary="Apply a rent increase")
async def apply_rent_increase(
    tenant_id: str,
    payload: RentCalculation,
    user: User = Depends(require_view("tenant_write")),
    session: DashboardSession = Depends(get_dashboard_session),
):
    """
    The increase is computed from the tenant's stored rent unless the
    form supplies ``current_rent`` explicitly.
    """
    current_rent = payload.current_rent
    if current_rent is None:
        tenant, failed = await fetch_one(
            session, session.repos.tenants, TenantRead, tenant_id,
            title="Error loading tenant",
        )
        if tenant is None:
            if not failed:
                session.notifier.error("Tenant not found", "The requested tenant could not be found.")
            return session.render("unit_details", tenant=None)
        current_rent = tenant.monthly_rent

    try:
        new_rent = calculate_new_rent(
            current_rent,
            payload.calculation_type,
            payload.percentage_increase,
            payload.fixed_increase,
        )
    except ValueError:
        return invalid_amount(session, "unit_details")

    try:
        row = await session.repos.tenants.update(tenant_id, {"monthly_rent": float(new_rent)})
    except RepositoryError as e:
        return repository_failure(session, "unit_details", "Error updating rent", e)

    logger.info(f"Rent for tenant {tenant_id} set to {new_rent} by {user.id}")
    session.notifier.notify(
        "Rent Updated",
        f"Monthly rent has been updated to ${new_rent:.2f}.",
    )
    return session.render(
        "unit_details",
        tenant=TenantRead.model_validate(row).model_dump(mode="json"),
        new_rent=f"{new_rent:.2f}",
    )
