# tests/test_views.py

"""
Tests for the dashboard, reports and showings views.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from main import describe_routes


@pytest.mark.parametrize("email,portal", [
    ("investor@example.com", "Investor Portal"),
    ("manager@example.com", "Property Management"),
    ("tenant@example.com", "Tenant Portal"),
    ("maintenance@example.com", "Maintenance Portal"),
    ("prospect@example.com", "Prospect Portal"),
])
def test_dashboard_renders_for_every_role(client: TestClient, login, email, portal):
    login(email)
    body = client.get("/").json()
    assert body["view"] == "dashboard"
    assert body["portal"] == portal
    assert body["stats"]


def test_investor_dashboard_shows_financial_activity(client: TestClient, login):
    login("investor@example.com")
    body = client.get("/").json()

    stats = {s["title"]: s["value"] for s in body["stats"]}
    assert stats["Total Properties"] == 2
    assert stats["Net Income"] == 29000.0
    assert all(a["title"].startswith(("Income", "Expense")) for a in body["activities"])


def test_tenant_dashboard_navigation(client: TestClient, login):
    login("tenant@example.com")
    labels = [item["label"] for item in client.get("/").json()["navigation"]]
    assert labels == ["Dashboard", "Properties", "Maintenance"]


def test_dashboard_requires_login(client: TestClient):
    response = client.get("/", follow_redirects=False)
    assert response.headers["location"] == "/login?next=/"


# -------------------------------------------------------------
# Reports
# -------------------------------------------------------------
def test_reports_summary_and_occupancy(client: TestClient, login):
    login("manager@example.com")
    body = client.get("/reports").json()

    assert body["summary"]["total_income"] == 36500.0
    assert body["summary"]["total_expenses"] == 7500.0
    occupancy = {row["property_id"]: row["occupancy"] for row in body["occupancy"]}
    assert occupancy == {"prop1": 50.0, "prop2": 100.0}


def test_reports_forbidden_for_maintenance(client: TestClient, login):
    login("maintenance@example.com")
    response = client.get("/reports", follow_redirects=False)
    assert response.headers["location"] == "/unauthorized"


# -------------------------------------------------------------
# Showings
# -------------------------------------------------------------
def test_prospect_sees_showings_in_date_order(client: TestClient, login):
    login("prospect@example.com")
    body = client.get("/showings").json()
    dates = [s["date"] for s in body["showings"]]
    assert len(dates) == 3
    assert dates == sorted(dates)


def test_tenant_cannot_open_showings(client: TestClient, login):
    login("tenant@example.com")
    response = client.get("/showings", follow_redirects=False)
    assert response.headers["location"] == "/unauthorized"


def test_route_listing_skips_entries_without_path():
    app = FastAPI()

    @app.get("/ping")
    def ping():
        return {}

    # Newer FastAPI mounts included routers as entries with no path
    app.router.routes.append(object())

    lines = describe_routes(app)
    assert any(line.startswith("GET") and line.endswith(" /ping") for line in lines)
    assert len(lines) == len(app.routes) - 1
