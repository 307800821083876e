# ============================================
# CENTRALIZED VIEW → PERMITTED ROLES MAP
# ============================================
# An empty set means "any authenticated role".
# Views missing from this map are public.

from typing import FrozenSet, List

from models.enums import Role


ANY_ROLE: FrozenSet[Role] = frozenset()

PROPERTY_VIEW_ROLES = frozenset({
    Role.investor,
    Role.property_manager,
    Role.tenant,
    Role.maintenance,
})

VIEW_ROLES = {

    # =====================================================
    # DASHBOARD
    # =====================================================
    "dashboard": ANY_ROLE,

    # =====================================================
    # PROPERTIES / UNITS
    # =====================================================
    "properties": PROPERTY_VIEW_ROLES,
    "property_details": PROPERTY_VIEW_ROLES,
    "unit_details": PROPERTY_VIEW_ROLES,
    "property_write": frozenset({Role.investor, Role.property_manager}),
    "unit_write": frozenset({Role.property_manager}),
    "tenant_write": frozenset({Role.property_manager}),

    # =====================================================
    # MAINTENANCE
    # =====================================================
    "maintenance": frozenset({Role.property_manager, Role.tenant, Role.maintenance}),
    "maintenance_create": frozenset({Role.property_manager, Role.tenant}),
    "maintenance_work": frozenset({Role.maintenance}),
    "maintenance_assign": frozenset({Role.property_manager}),
    "maintenance_cancel": frozenset({Role.property_manager, Role.tenant}),
    "maintenance_comment": frozenset({Role.property_manager, Role.tenant, Role.maintenance}),

    # =====================================================
    # REPORTS (financials)
    # =====================================================
    "reports": frozenset({Role.investor, Role.property_manager}),

    # =====================================================
    # SHOWINGS
    # =====================================================
    "showings": frozenset({Role.property_manager, Role.potential_tenant}),

    # =====================================================
    # UNAUTHORIZED (shows the caller's role)
    # =====================================================
    "unauthorized": ANY_ROLE,
}


# ============================================
# SIDEBAR NAVIGATION
# ============================================
# Dashboard and Properties are hidden from potential tenants even
# though "/" accepts any role.
NAV_ITEMS = [
    {"label": "Dashboard", "href": "/", "roles": PROPERTY_VIEW_ROLES},
    {"label": "Reports", "href": "/reports", "roles": VIEW_ROLES["reports"]},
    {"label": "Properties", "href": "/properties", "roles": PROPERTY_VIEW_ROLES},
    {"label": "Showings", "href": "/showings", "roles": VIEW_ROLES["showings"]},
    {"label": "Maintenance", "href": "/maintenance", "roles": VIEW_ROLES["maintenance"]},
]


def nav_items_for(role: Role) -> List[dict]:
    return [
        {"label": item["label"], "href": item["href"]}
        for item in NAV_ITEMS
        if role in item["roles"]
    ]


def portal_title(role: Role) -> str:
    if role == Role.investor:
        return "Investor Portal"
    if role == Role.property_manager:
        return "Property Management"
    if role == Role.tenant:
        return "Tenant Portal"
    if role == Role.maintenance:
        return "Maintenance Portal"
    if role == Role.potential_tenant:
        return "Prospect Portal"
    raise ValueError(f"Unhandled role: {role!r}")
