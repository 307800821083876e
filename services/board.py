# services/board.py

"""
In-process store for maintenance requests, showings and financial
records. One board is shared by every dashboard session of the process;
records are replaced wholesale on change, never edited in place.
"""

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from core.logging_config import logger
from models.enums import MaintenanceStatus
from models.maintenance import MaintenanceComment, MaintenanceRequest
from models.reports import FinancialRecord, Showing
from models.user import User
from services.sample_data import (
    SAMPLE_FINANCIAL_RECORDS,
    SAMPLE_MAINTENANCE_REQUESTS,
    SAMPLE_SHOWINGS,
)


class BoardError(Exception):
    """An action's precondition does not hold for the request's current state."""


class Board:
    def __init__(
        self,
        requests: Iterable[dict] = (),
        showings: Iterable[dict] = (),
        financial_records: Iterable[dict] = (),
    ):
        self._requests: List[MaintenanceRequest] = [
            MaintenanceRequest.model_validate(r) for r in requests
        ]
        self.showings: List[Showing] = [Showing.model_validate(s) for s in showings]
        self.financial_records: List[FinancialRecord] = [
            FinancialRecord.model_validate(f) for f in financial_records
        ]

    @classmethod
    def with_sample_data(cls) -> "Board":
        return cls(SAMPLE_MAINTENANCE_REQUESTS, SAMPLE_SHOWINGS, SAMPLE_FINANCIAL_RECORDS)

    # -------------------------------------------------
    # Maintenance requests
    # -------------------------------------------------
    @property
    def requests(self) -> List[MaintenanceRequest]:
        return list(self._requests)

    def get_request(self, request_id: str) -> Optional[MaintenanceRequest]:
        for r in self._requests:
            if r.id == request_id:
                return r
        return None

    def _replace(self, updated: MaintenanceRequest) -> MaintenanceRequest:
        self._requests = [updated if r.id == updated.id else r for r in self._requests]
        return updated

    def create_request(self, data: dict, user: User) -> MaintenanceRequest:
        request = MaintenanceRequest(
            id=f"maint-{uuid.uuid4().hex[:8]}",
            created_at=datetime.now(timezone.utc),
            created_by=user.id,
            status=MaintenanceStatus.pending,
            **data,
        )
        self._requests.append(request)
        logger.info(f"Maintenance request {request.id} created by {user.id}")
        return request

    def _transition(
        self,
        request: MaintenanceRequest,
        expected: MaintenanceStatus,
        **changes,
    ) -> MaintenanceRequest:
        if request.status != expected:
            raise BoardError(
                f"Request {request.id} is {request.status.value}, expected {expected.value}"
            )
        updated = self._replace(request.model_copy(update=changes))
        logger.info(f"Maintenance request {request.id} updated: {changes}")
        return updated

    def accept(self, request: MaintenanceRequest, user: User) -> MaintenanceRequest:
        return self._transition(
            request,
            MaintenanceStatus.pending,
            status=MaintenanceStatus.in_progress,
            assigned_to=user.id,
        )

    def complete(self, request: MaintenanceRequest) -> MaintenanceRequest:
        return self._transition(
            request, MaintenanceStatus.in_progress, status=MaintenanceStatus.completed
        )

    def assign(self, request: MaintenanceRequest, assignee_id: str) -> MaintenanceRequest:
        return self._transition(request, MaintenanceStatus.pending, assigned_to=assignee_id)

    def cancel(self, request: MaintenanceRequest) -> MaintenanceRequest:
        return self._transition(
            request, MaintenanceStatus.pending, status=MaintenanceStatus.cancelled
        )

    def add_comment(self, request: MaintenanceRequest, text: str, user: User) -> MaintenanceRequest:
        comment = MaintenanceComment(
            id=f"comment-{uuid.uuid4().hex[:8]}",
            text=text,
            created_at=datetime.now(timezone.utc),
            created_by=user.id,
        )
        return self._replace(
            request.model_copy(update={"comments": [*request.comments, comment]})
        )
