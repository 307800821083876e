# tests/test_tenants.py

"""
Tests for tenant updates and the rent calculator.
"""

from fastapi.testclient import TestClient


def test_rent_increase_by_percentage(client: TestClient, login, database):
    login("manager@example.com")
    response = client.post("/tenants/ten1/rent", json={"calculation_type": "percentage", "percentage_increase": "5"})

    assert response.status_code == 200
    body = response.json()
    assert body["new_rent"] == "1050.00"
    assert body["notifications"][-1] == {
        "title": "Rent Updated",
        "description": "Monthly rent has been updated to $1050.00.",
        "variant": "default",
    }
    assert database.tenants.rows[0]["monthly_rent"] == 1050.0


def test_rent_increase_by_fixed_amount(client: TestClient, login):
    login("manager@example.com")
    body = client.post("/tenants/ten1/rent", json={"calculation_type": "fixed", "fixed_increase": "50"}).json()
    assert body["new_rent"] == "1050.00"


def test_rent_preview_does_not_write(client: TestClient, login, database):
    login("manager@example.com")
    body = client.post("/rent/calculate", json={"current_rent": 1500, "percentage_increase": "10"}).json()
    assert body["new_rent"] == "1650.00"
    assert database.tenants.rows[1]["monthly_rent"] == 1500


def test_rent_preview_with_huge_exponent(client: TestClient, login):
    login("manager@example.com")
    body = client.post("/rent/calculate", json={"current_rent": 1000, "percentage_increase": "1e30"}).json()
    assert body["new_rent"] == "10000000000000000000000000001000.00"


def test_rent_out_of_range_is_rejected(client: TestClient, login, database):
    login("manager@example.com")
    response = client.post("/tenants/ten1/rent", json={"percentage_increase": "1e99999"})

    assert response.status_code == 400
    assert response.json()["notifications"][-1]["title"] == "Invalid Amount"
    assert database.tenants.rows[0]["monthly_rent"] == 1000


def test_rent_for_unknown_tenant(client: TestClient, login):
    login("manager@example.com")
    body = client.post("/tenants/ghost/rent", json={"calculation_type": "fixed"}).json()
    assert body["notifications"][-1]["title"] == "Tenant not found"


def test_only_property_managers_change_rent(client: TestClient, login):
    login("investor@example.com")
    response = client.post("/tenants/ten1/rent", json={"calculation_type": "fixed"}, follow_redirects=False)
    assert response.headers["location"] == "/unauthorized"


def test_update_tenant(client: TestClient, login, database):
    login("manager@example.com")
    response = client.patch("/tenants/ten2", json={"phone": "555-0100"})
    assert response.status_code == 200
    assert database.tenants.rows[1]["phone"] == "555-0100"


def test_update_missing_tenant_is_404(client: TestClient, login):
    login("manager@example.com")
    response = client.patch("/tenants/ghost", json={"phone": "555-0100"})
    assert response.status_code == 404
