# tests/test_sorting.py

"""
Tests for the maintenance list status filter and sort.
"""

from datetime import datetime, timedelta, timezone

from core.role_filters import filter_by_status, sort_maintenance_requests
from models.enums import SortDirection
from models.maintenance import MaintenanceRequest, SortConfig


BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def request(id, priority="medium", days=0, status="pending", title="Task"):
    return MaintenanceRequest(
        id=id,
        property_id="prop1",
        unit_number="101",
        title=title,
        description="",
        status=status,
        priority=priority,
        created_at=BASE + timedelta(days=days),
        created_by="3",
    )


def test_priority_ascending_puts_emergency_first():
    requests = [request("a", "low"), request("b", "emergency"), request("c", "medium"), request("d", "high")]
    ordered = sort_maintenance_requests(requests, SortConfig(key="priority", direction="asc"))
    assert [r.priority.value for r in ordered] == ["emergency", "high", "medium", "low"]


def test_created_at_descending_is_newest_first():
    requests = [request("old", days=0), request("new", days=2), request("mid", days=1)]
    ordered = sort_maintenance_requests(requests, SortConfig())
    assert [r.id for r in ordered] == ["new", "mid", "old"]


def test_camel_case_created_at_key_is_accepted():
    requests = [request("old", days=0), request("new", days=2)]
    ordered = sort_maintenance_requests(requests, SortConfig(key="createdAt", direction="asc"))
    assert [r.id for r in ordered] == ["old", "new"]


def test_other_keys_sort_by_string_value():
    requests = [request("1", title="Window"), request("2", title="Faucet"), request("3", title="Door")]
    ordered = sort_maintenance_requests(requests, SortConfig(key="title", direction="asc"))
    assert [r.title for r in ordered] == ["Door", "Faucet", "Window"]


def test_equal_keys_keep_relative_order():
    requests = [request("first", "high"), request("second", "high"), request("third", "high")]
    for direction in ("asc", "desc"):
        ordered = sort_maintenance_requests(requests, SortConfig(key="priority", direction=direction))
        assert [r.id for r in ordered] == ["first", "second", "third"]


def test_sort_does_not_mutate_input():
    requests = [request("a", "low"), request("b", "emergency")]
    sort_maintenance_requests(requests, SortConfig(key="priority", direction="asc"))
    assert [r.id for r in requests] == ["a", "b"]


# -------------------------------------------------------------
# Toggle
# -------------------------------------------------------------
def test_toggle_same_key_cycles_asc_desc_asc():
    config = SortConfig().toggle("priority")
    assert (config.key, config.direction) == ("priority", SortDirection.asc)

    config = config.toggle("priority")
    assert config.direction == SortDirection.desc

    config = config.toggle("priority")
    assert config.direction == SortDirection.asc


def test_toggle_new_key_starts_ascending():
    config = SortConfig(key="priority", direction="asc").toggle("title")
    assert (config.key, config.direction) == ("title", SortDirection.asc)


def test_default_sort_is_created_at_descending():
    config = SortConfig()
    assert (config.key, config.direction) == ("created_at", SortDirection.desc)


# -------------------------------------------------------------
# Status filter
# -------------------------------------------------------------
def test_status_filter():
    requests = [request("a"), request("b", status="completed"), request("c", status="completed")]
    assert [r.id for r in filter_by_status(requests, "completed")] == ["b", "c"]
    assert len(filter_by_status(requests, "all")) == 3
    assert len(filter_by_status(requests, None)) == 3
