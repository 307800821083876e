# tests/test_properties.py

"""
Tests for the property, unit and tenant views.
"""

from fastapi.testclient import TestClient


def test_investor_lists_all_properties_with_occupancy(client: TestClient, login):
    login("investor@example.com")
    body = client.get("/properties").json()

    by_id = {p["id"]: p for p in body["properties"]}
    assert set(by_id) == {"prop1", "prop2"}
    assert by_id["prop1"]["occupancy_rate"] == 50.0
    assert by_id["prop2"]["occupancy_rate"] == 100.0


def test_tenant_lists_only_own_property(client: TestClient, login):
    login("tenant@example.com")
    body = client.get("/properties").json()
    assert [p["id"] for p in body["properties"]] == ["prop1"]


def test_potential_tenant_cannot_open_properties(client: TestClient, login):
    login("prospect@example.com")
    response = client.get("/properties", follow_redirects=False)
    assert response.headers["location"] == "/unauthorized"


def test_property_details_include_units_and_tenant_counts(client: TestClient, login):
    login("manager@example.com")
    body = client.get("/properties/prop1").json()

    assert body["property"]["name"] == "Sunset Apartments"
    units = {u["unit_number"]: u for u in body["units"]}
    assert units["101"]["tenant_count"] == 1
    assert units["108"]["tenant_count"] == 0
    assert body["occupancy_rate"] == 50.0


def test_missing_property_redirects_with_notification(client: TestClient, login):
    login("manager@example.com")
    response = client.get("/properties/nope", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/properties"

    listing = client.get("/properties").json()
    assert listing["notifications"][-1]["title"] == "Property not found"


def test_property_outside_visible_set_is_not_found(client: TestClient, login):
    login("tenant@example.com")
    response = client.get("/properties/prop2", follow_redirects=False)
    assert response.headers["location"] == "/properties"


def test_load_failure_renders_with_notification(client: TestClient, login, database):
    login("investor@example.com")
    database.properties.fail_with = "connection refused"

    body = client.get("/properties").json()
    assert body["properties"] == []
    assert body["notifications"][-1]["title"] == "Error loading properties"
    assert body["notifications"][-1]["variant"] == "destructive"


def test_unreadable_rows_render_with_notification(client: TestClient, login, database):
    login("manager@example.com")
    database.tenants.rows[0]["monthly_rent"] = None

    response = client.get("/properties/prop1")
    assert response.status_code == 200
    body = response.json()
    assert body["tenants"] == []
    assert body["notifications"][-1]["title"] == "Error loading tenants"
    assert body["notifications"][-1]["variant"] == "destructive"


def test_unreadable_unit_renders_empty_unit(client: TestClient, login, database):
    login("manager@example.com")
    database.units.rows[0]["status"] = "demolished"

    response = client.get("/properties/prop1/units/unit1")
    assert response.status_code == 200
    body = response.json()
    assert body["unit"] is None
    assert body["notifications"][-1]["title"] == "Error loading unit"


# -------------------------------------------------------------
# Writes
# -------------------------------------------------------------
def test_create_property_records_creator(client: TestClient, login, database):
    login("investor@example.com")
    response = client.post(
        "/properties",
        json={"name": "Maple Court", "address": "3 Maple St", "units": 2},
    )
    assert response.status_code == 201
    created = database.properties.rows[-1]
    assert created["name"] == "Maple Court"
    assert created["created_by"] == "1"


def test_create_property_with_blank_name_is_missing_information(client: TestClient, login, database):
    login("investor@example.com")
    response = client.post("/properties", json={"name": " ", "address": "3 Maple St", "units": 2})

    assert response.status_code == 400
    assert response.json()["notifications"][-1]["title"] == "Missing Information"
    assert len(database.properties.rows) == 2


def test_tenant_cannot_create_property(client: TestClient, login):
    login("tenant@example.com")
    response = client.post(
        "/properties",
        json={"name": "Maple Court", "address": "3 Maple St", "units": 2},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/unauthorized"


def test_backend_rejection_surfaces_as_notification(client: TestClient, login, database):
    login("manager@example.com")
    database.units.fail_with = "duplicate key value violates unique constraint"

    response = client.post("/properties/prop1/units", json={"unit_number": "101"})
    assert response.status_code == 502
    assert response.json()["notifications"][-1]["description"] == "A record with these details already exists."


def test_add_unit_and_change_status(client: TestClient, login, database):
    login("manager@example.com")
    created = client.post("/properties/prop1/units", json={"unit_number": "110", "bedrooms": 2})
    assert created.status_code == 201
    unit_id = created.json()["unit"]["id"]

    updated = client.patch(f"/properties/prop1/units/{unit_id}", json={"status": "maintenance"})
    assert updated.status_code == 200
    assert updated.json()["unit"]["status"] == "maintenance"


def test_unit_details_lists_its_tenants(client: TestClient, login):
    login("manager@example.com")
    body = client.get("/properties/prop1/units/unit1").json()
    assert body["unit"]["unit_number"] == "101"
    assert [t["name"] for t in body["tenants"]] == ["Tina Tenant"]


def test_unit_from_another_property_is_not_found(client: TestClient, login):
    login("manager@example.com")
    response = client.get("/properties/prop1/units/unit3", follow_redirects=False)
    assert response.headers["location"] == "/properties/prop1"


def test_add_tenant_to_unit(client: TestClient, login, database):
    login("manager@example.com")
    response = client.post(
        "/properties/prop1/units/unit2/tenants",
        json={"name": "New Resident", "monthly_rent": 1200, "is_primary": True},
    )
    assert response.status_code == 201
    assert database.tenants.rows[-1]["unit_id"] == "unit2"


def test_unit_update_under_wrong_property_is_refused(client: TestClient, login, database):
    login("manager@example.com")
    response = client.patch("/properties/prop1/units/unit3", json={"status": "vacant"})

    assert response.status_code == 404
    assert response.json()["notifications"][-1]["title"] == "Unit not found"
    assert database.units.rows[2]["status"] == "occupied"
    assert "update" not in database.units.calls


def test_tenant_under_wrong_property_is_refused(client: TestClient, login, database):
    login("manager@example.com")
    response = client.post(
        "/properties/prop2/units/unit2/tenants",
        json={"name": "New Resident", "monthly_rent": 1200},
    )

    assert response.status_code == 404
    assert len(database.tenants.rows) == 2
