# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from models.enums import Role
from models.user import User
from services.board import Board

from fakes import FakeDatabase, PASSWORD, session_factory


@pytest.fixture
def database():
    """Seeded in-memory tables shared by every session of one app."""
    return FakeDatabase()


@pytest.fixture
def board():
    return Board.with_sample_data()


@pytest.fixture
def auth_clients():
    """FakeAuth instances, one per dashboard session, in creation order."""
    return []


@pytest.fixture(scope="function")
def app(database, board, auth_clients):
    """Create a test FastAPI application instance."""
    return create_app(
        session_factory=session_factory(database, auth_clients),
        board=board,
    )


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """POST /login without following the redirect."""
    def _login(email: str, password: str = PASSWORD, next: str = None):
        return client.post(
            "/login",
            json={"email": email, "password": password, "next": next},
            follow_redirects=False,
        )
    return _login


def make_user(role: Role, id: str = None) -> User:
    ids = {
        Role.investor: "1",
        Role.property_manager: "2",
        Role.tenant: "3",
        Role.maintenance: "4",
        Role.potential_tenant: "5",
    }
    return User(
        id=id or ids[role],
        email=f"{role.value}@example.com",
        name=role.display_name.title(),
        role=role,
    )


@pytest.fixture
def users():
    """One user per role, keyed by Role."""
    return {role: make_user(role) for role in Role}


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Reset the login limiter before each test."""
    from core.rate_limiter import clear_rate_limits
    clear_rate_limits()
    yield
    clear_rate_limits()
