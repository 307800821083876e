# core/role_filters.py

"""
Role-scoped view filters.

Every filter takes the full record set and the acting user and returns a
new list holding the subset that user's role may see. Inputs are never
mutated and nothing here touches the network. Each filter branches over
every ``Role`` member and raises on one it does not know, so adding a
role fails loudly until every filter has a rule for it.
"""

from typing import Callable, Dict, Iterable, List, Optional, Set

from models.enums import MaintenancePriority, MaintenanceStatus, Role, SortDirection
from models.maintenance import MaintenanceRequest, SortConfig
from models.user import User


def _unhandled(role: Role):
    return ValueError(f"Unhandled role: {role!r}")


def _own_unit_ids(tenancies: Iterable, user: User) -> Set[str]:
    return {t.unit_id for t in tenancies if t.user_id == user.id}


def _assigned_property_ids(requests: Iterable[MaintenanceRequest], user: User) -> Set[str]:
    # Only requests actually assigned to the user, not the unassigned pool
    return {r.property_id for r in requests if r.assigned_to == user.id}


# -----------------------------------------------------
# PROPERTIES
# -----------------------------------------------------
def visible_properties(
    properties: Iterable,
    user: User,
    *,
    tenancies: Iterable = (),
    units: Iterable = (),
    requests: Iterable[MaintenanceRequest] = (),
) -> List:
    role = user.role

    if role in (Role.investor, Role.property_manager):
        return list(properties)

    if role == Role.tenant:
        unit_ids = _own_unit_ids(tenancies, user)
        property_ids = {u.property_id for u in units if u.id in unit_ids}
        return [p for p in properties if p.id in property_ids]

    if role == Role.maintenance:
        property_ids = _assigned_property_ids(requests, user)
        return [p for p in properties if p.id in property_ids]

    if role == Role.potential_tenant:
        return []

    raise _unhandled(role)


# -----------------------------------------------------
# UNITS
# -----------------------------------------------------
def visible_units(
    units: Iterable,
    user: User,
    *,
    tenancies: Iterable = (),
    requests: Iterable[MaintenanceRequest] = (),
) -> List:
    role = user.role

    if role in (Role.investor, Role.property_manager):
        return list(units)

    if role == Role.tenant:
        unit_ids = _own_unit_ids(tenancies, user)
        return [u for u in units if u.id in unit_ids]

    if role == Role.maintenance:
        property_ids = _assigned_property_ids(requests, user)
        return [u for u in units if u.property_id in property_ids]

    if role == Role.potential_tenant:
        return []

    raise _unhandled(role)


# -----------------------------------------------------
# TENANTS
# -----------------------------------------------------
def visible_tenants(tenants: Iterable, user: User) -> List:
    role = user.role

    if role in (Role.investor, Role.property_manager):
        return list(tenants)

    if role == Role.tenant:
        return [t for t in tenants if t.user_id == user.id]

    if role in (Role.maintenance, Role.potential_tenant):
        return []

    raise _unhandled(role)


# -----------------------------------------------------
# MAINTENANCE REQUESTS
# -----------------------------------------------------
def visible_maintenance_requests(
    requests: Iterable[MaintenanceRequest],
    user: User,
) -> List[MaintenanceRequest]:
    role = user.role

    if role in (Role.investor, Role.property_manager):
        return list(requests)

    if role == Role.tenant:
        return [r for r in requests if r.created_by == user.id]

    if role == Role.maintenance:
        return [r for r in requests if r.assigned_to == user.id or not r.assigned_to]

    if role == Role.potential_tenant:
        return []

    raise _unhandled(role)


# -----------------------------------------------------
# FINANCIAL RECORDS
# -----------------------------------------------------
def visible_financial_records(records: Iterable, user: User) -> List:
    role = user.role

    if role in (Role.investor, Role.property_manager):
        return list(records)

    if role in (Role.tenant, Role.maintenance, Role.potential_tenant):
        return []

    raise _unhandled(role)


# -----------------------------------------------------
# SHOWINGS
# -----------------------------------------------------
def visible_showings(showings: Iterable, user: User) -> List:
    role = user.role

    if role in (Role.property_manager, Role.potential_tenant):
        return list(showings)

    if role in (Role.investor, Role.tenant, Role.maintenance):
        return []

    raise _unhandled(role)


FILTERS: Dict[str, Callable[..., List]] = {
    "properties": visible_properties,
    "units": visible_units,
    "tenants": visible_tenants,
    "maintenance_requests": visible_maintenance_requests,
    "financial_records": visible_financial_records,
    "showings": visible_showings,
}


def filter_for_role(resource: str, records: Iterable, user: User, **context) -> List:
    """
    Dispatch to the filter for ``resource``. Context keywords
    (tenancies, units, requests) are only passed to filters that take them.
    """
    try:
        view_filter = FILTERS[resource]
    except KeyError:
        raise ValueError(f"Unknown resource: {resource}")

    if view_filter in (visible_properties, visible_units):
        return view_filter(records, user, **context)
    return view_filter(records, user)


# =====================================================
# MAINTENANCE LIST: status filter + sort
# =====================================================

PRIORITY_RANK = {
    MaintenancePriority.emergency: 0,
    MaintenancePriority.high: 1,
    MaintenancePriority.medium: 2,
    MaintenancePriority.low: 3,
}

SORT_KEY_ALIASES = {"createdAt": "created_at"}


def filter_by_status(
    requests: Iterable[MaintenanceRequest],
    status: Optional[str] = None,
) -> List[MaintenanceRequest]:
    if not status or status == "all":
        return list(requests)
    wanted = MaintenanceStatus(status)
    return [r for r in requests if r.status == wanted]


def _sort_value(request: MaintenanceRequest, key: str):
    if key == "priority":
        return PRIORITY_RANK[request.priority]
    if key == "created_at":
        return request.created_at.timestamp()

    value = getattr(request, key, None)
    return "" if value is None else str(value)


def sort_maintenance_requests(
    requests: Iterable[MaintenanceRequest],
    config: SortConfig,
) -> List[MaintenanceRequest]:
    """
    Stable sort: requests with equal keys keep their relative order in
    both directions.
    """
    key = SORT_KEY_ALIASES.get(config.key, config.key)
    return sorted(
        requests,
        key=lambda r: _sort_value(r, key),
        reverse=config.direction == SortDirection.desc,
    )
