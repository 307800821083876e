# models/property.py

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from models.enums import UnitStatus


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class PropertyBase(BaseModel):
    name: str
    address: str
    units: int = Field(..., gt=0, description="Declared unit capacity")
    image_url: Optional[str] = None


# -------------------------------------------------
# Create
# -------------------------------------------------
class PropertyCreate(PropertyBase):
    """
    No ID supplied; Supabase generates the UUID.
    created_by is filled from the signed-in user.
    """
    pass


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class PropertyRead(PropertyBase):
    id: str
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None

    @field_validator("id", "created_by", mode="before")
    @classmethod
    def normalize_uuid(cls, v):
        if isinstance(v, UUID):
            return str(v)
        return v


# -------------------------------------------------
# Update (PATCH)
# -------------------------------------------------
class PropertyUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    units: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = None


# =================================================
# Units
# =================================================
class UnitBase(BaseModel):
    unit_number: str
    status: UnitStatus = UnitStatus.vacant
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[int] = None


class UnitCreate(UnitBase):
    pass


class UnitRead(UnitBase):
    id: str
    property_id: str
    created_at: Optional[datetime] = None

    @field_validator("id", "property_id", mode="before")
    @classmethod
    def normalize_uuid(cls, v):
        if isinstance(v, UUID):
            return str(v)
        return v


class UnitUpdate(BaseModel):
    unit_number: Optional[str] = None
    status: Optional[UnitStatus] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[int] = None
