# core/route_guard.py

"""
Per-navigation access decision.

The decision is recomputed from two inputs every time: the session
manager's loading flag and its current user. Nothing about a previous
decision is kept.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import quote, urlsplit

from models.enums import BaseStrEnum, Role
from models.user import User


LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"


class GuardState(BaseStrEnum):
    loading = "loading"
    unauthenticated = "unauthenticated"
    forbidden = "forbidden"
    authorized = "authorized"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    redirect_to: Optional[str] = None
    role: Optional[Role] = None

    def as_dict(self) -> dict:
        return {
            "state": self.state.value,
            "redirect_to": self.redirect_to,
            "role": self.role.value if self.role else None,
        }


def login_redirect(requested_path: str) -> str:
    return f"{LOGIN_PATH}?next={quote(requested_path, safe='/')}"


def evaluate_access(
    loading: bool,
    user: Optional[User],
    permitted_roles: Iterable[Role],
    requested_path: str,
) -> GuardDecision:
    if loading:
        return GuardDecision(GuardState.loading)

    if user is None:
        return GuardDecision(
            GuardState.unauthenticated,
            redirect_to=login_redirect(requested_path),
        )

    permitted = frozenset(permitted_roles)
    if permitted and user.role not in permitted:
        return GuardDecision(
            GuardState.forbidden,
            redirect_to=UNAUTHORIZED_PATH,
            role=user.role,
        )

    return GuardDecision(GuardState.authorized, role=user.role)


def safe_next_path(next_path: Optional[str], default: str = "/") -> str:
    """
    Only same-site absolute paths are honoured after login; anything
    carrying a scheme or host, and the login view itself, falls back.
    """
    if not next_path:
        return default

    parts = urlsplit(next_path)
    if parts.scheme or parts.netloc or not next_path.startswith("/") or next_path.startswith("//"):
        return default
    if parts.path == LOGIN_PATH:
        return default
    return next_path
