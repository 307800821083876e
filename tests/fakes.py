# tests/fakes.py

"""
In-memory stand-ins for the Supabase pieces a dashboard session talks to:
the async Auth client (with its auth-state callbacks) and the table
repositories.
"""

from types import SimpleNamespace

from core.errors import RecordNotFound, RepositoryError
from services.dashboard_session import DashboardSession
from services.notifications import Notifier
from services.session_manager import AuthSessionManager


PASSWORD = "password"

ACCOUNTS = {
    "investor@example.com": {"id": "1", "name": "Ivy Investor", "role": "investor"},
    "manager@example.com": {"id": "2", "name": "Mark Manager", "role": "property_manager"},
    "tenant@example.com": {"id": "3", "name": "Tina Tenant", "role": "tenant"},
    "maintenance@example.com": {"id": "4", "name": "Max Fixer", "role": "maintenance"},
    "prospect@example.com": {"id": "5", "name": "Pat Prospect", "role": "potential_tenant"},
}


# =============================================================
# Auth (Session Store)
# =============================================================
def auth_session(email: str, metadata: dict = None):
    account = ACCOUNTS[email]
    user = SimpleNamespace(
        id=account["id"],
        email=email,
        user_metadata=metadata if metadata is not None else {
            "name": account["name"],
            "role": account["role"],
        },
    )
    return SimpleNamespace(user=user, access_token=f"token-{account['id']}")


class FakeSubscription:
    def __init__(self, callbacks, callback):
        self._callbacks = callbacks
        self._callback = callback

    def unsubscribe(self):
        if self._callback in self._callbacks:
            self._callbacks.remove(self._callback)


class FakeAuth:
    """Mimics the async GoTrue client: calls callbacks synchronously."""

    def __init__(self, session=None):
        self.session = session
        self.callbacks = []
        self.sign_out_error = None
        self.sign_up_calls = []

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(self.callbacks, callback)

    def emit(self, event, session):
        for callback in list(self.callbacks):
            callback(event, session)

    async def get_session(self):
        return self.session

    async def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if email not in ACCOUNTS or credentials["password"] != PASSWORD:
            raise Exception("Invalid login credentials")

        self.session = auth_session(email)
        self.emit("SIGNED_IN", self.session)
        return SimpleNamespace(session=self.session, user=self.session.user)

    async def sign_out(self):
        if self.sign_out_error:
            raise self.sign_out_error
        self.session = None
        self.emit("SIGNED_OUT", None)

    async def sign_up(self, credentials):
        if credentials["email"] in ACCOUNTS:
            raise Exception("User already registered")
        self.sign_up_calls.append(credentials)
        return SimpleNamespace(user=None, session=None)


# =============================================================
# Tables (Profile Repository)
# =============================================================
class InMemoryRepository:
    """Same async surface as services.repository.TableRepository."""

    def __init__(self, table: str, rows=()):
        self.table = table
        self.rows = [dict(r) for r in rows]
        self.fail_with = None
        self.calls = []

    def _check(self, operation: str):
        self.calls.append(operation)
        if self.fail_with:
            raise RepositoryError(f"{operation} {self.table}", self.fail_with)

    async def list(self, filters=None, in_filters=None, order=None):
        self._check("list")
        rows = [
            r for r in self.rows
            if all(r.get(k) == v for k, v in (filters or {}).items())
            and all(r.get(k) in list(vals) for k, vals in (in_filters or {}).items())
        ]
        if order:
            rows = sorted(rows, key=lambda r: str(r.get(order) or ""))
        return [dict(r) for r in rows]

    async def get_by_id(self, record_id):
        self._check("get_by_id")
        for r in self.rows:
            if r["id"] == record_id:
                return dict(r)
        return None

    async def create(self, row):
        self._check("create")
        created = {**row, "id": row.get("id") or f"{self.table}-{len(self.rows) + 1}"}
        self.rows.append(created)
        return dict(created)

    async def update(self, record_id, partial):
        self._check("update")
        for r in self.rows:
            if r["id"] == record_id:
                r.update(partial)
                return dict(r)
        raise RecordNotFound(self.table, record_id)

    async def delete(self, record_id):
        self._check("delete")
        self.rows = [r for r in self.rows if r["id"] != record_id]


class FakeDatabase:
    def __init__(self):
        self.properties = InMemoryRepository("properties", [
            {"id": "prop1", "name": "Sunset Apartments", "address": "1 Sunset Blvd", "units": 10, "created_by": "1"},
            {"id": "prop2", "name": "Harbor View", "address": "22 Harbor Rd", "units": 4, "created_by": "1"},
        ])
        self.units = InMemoryRepository("property_units", [
            {"id": "unit1", "property_id": "prop1", "unit_number": "101", "status": "occupied"},
            {"id": "unit2", "property_id": "prop1", "unit_number": "108", "status": "vacant"},
            {"id": "unit3", "property_id": "prop2", "unit_number": "205", "status": "occupied"},
        ])
        self.tenants = InMemoryRepository("tenants", [
            {"id": "ten1", "unit_id": "unit1", "user_id": "3", "name": "Tina Tenant",
             "is_primary": True, "monthly_rent": 1000},
            {"id": "ten2", "unit_id": "unit3", "user_id": None, "name": "Sam Resident",
             "is_primary": True, "monthly_rent": 1500},
        ])
        self.profiles = InMemoryRepository("profiles", [
            {"id": a["id"], "email": email, "name": a["name"], "role": a["role"]}
            for email, a in ACCOUNTS.items()
        ])


def session_factory(database: FakeDatabase, auth_sessions: list = None):
    """
    Factory for create_app: each dashboard session gets its own FakeAuth
    (appended to ``auth_sessions`` when given) over the shared database.
    """
    async def build(session_id: str) -> DashboardSession:
        auth = FakeAuth()
        if auth_sessions is not None:
            auth_sessions.append(auth)
        notifier = Notifier()
        manager = AuthSessionManager(auth, database.profiles, notifier)
        return DashboardSession(session_id, manager, database, notifier)

    return build
