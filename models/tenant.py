# models/tenant.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from models.enums import CalculationType


class TenantBase(BaseModel):
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_primary: bool = False
    monthly_rent: float = Field(0, ge=0)
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    move_in_date: Optional[date] = None


class TenantCreate(TenantBase):
    """unit_id comes from the URL."""
    pass


class TenantRead(TenantBase):
    id: str
    unit_id: str


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_primary: Optional[bool] = None
    monthly_rent: Optional[float] = Field(None, ge=0)
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    move_in_date: Optional[date] = None


# -----------------------------------------------------
# RENT CALCULATOR
# -----------------------------------------------------
class RentCalculation(BaseModel):
    """
    Inputs arrive as the calculator form sends them: increases are
    free-text and parsed leniently.
    """
    calculation_type: CalculationType = CalculationType.percentage
    current_rent: Optional[float] = Field(None, ge=0)
    percentage_increase: str = "5"
    fixed_increase: str = "50"
