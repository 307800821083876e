# models/user.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from models.enums import Role


# ===============================================================
# DASHBOARD USER (in-memory, owned by the Auth Session Manager)
# ===============================================================

class User(BaseModel):
    """
    The signed-in dashboard user. Replaced wholesale, never mutated.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: Role


# ===============================================================
# PROFILES TABLE ROW
# ===============================================================

class Profile(BaseModel):
    """
    Mirrors public.profiles (materialized by the sign-up trigger).
    """
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[Role] = None
