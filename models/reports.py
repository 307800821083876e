# models/reports.py

import datetime
from pydantic import BaseModel

from models.enums import RecordType, ShowingStatus


class Showing(BaseModel):
    id: str
    property_id: str
    unit_number: str
    date: datetime.date
    time: str
    prospect_name: str
    prospect_email: str
    prospect_phone: str
    status: ShowingStatus = ShowingStatus.scheduled


class FinancialRecord(BaseModel):
    id: str
    property_id: str
    type: RecordType
    category: str
    amount: float
    date: datetime.date
    description: str
