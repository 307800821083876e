from typing import Optional
from pydantic import BaseModel, EmailStr

from models.enums import Role


# -----------------------------------------------------
# LOGIN REQUEST (Supabase email/password)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    next: Optional[str] = None    # path the guard redirected away from


# -----------------------------------------------------
# SIGN-UP REQUEST (metadata feeds the profiles trigger)
# -----------------------------------------------------
class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    name: str
    role: Role
