# stockflow/models/stock_request.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from stockflow.models.actor import Actor
from stockflow.utils.id_handler import IdHandler


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PARTIALLY_ISSUED = "PARTIALLY_ISSUED"
    ISSUED = "ISSUED"
    CLOSED = "CLOSED"


TERMINAL_STATUSES = (RequestStatus.REJECTED, RequestStatus.CLOSED)
APPROVABLE_STATUSES = (RequestStatus.PENDING,)
MODIFIABLE_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED)
ISSUABLE_STATUSES = (RequestStatus.APPROVED, RequestStatus.PARTIALLY_ISSUED)
RECEIVABLE_STATUSES = (RequestStatus.PARTIALLY_ISSUED, RequestStatus.ISSUED)
CLOSABLE_STATUSES = (RequestStatus.PARTIALLY_ISSUED, RequestStatus.ISSUED)


class RequestItemModel(BaseModel):
    """One requested stock line, embedded in its request"""
    id: str = Field(default_factory=IdHandler.generate_id, alias="_id")
    stock_in_id: str
    qty_requested: float
    qty_approved: float = 0
    qty_issued: float = 0
    qty_remaining: float = 0
    qty_received: float = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "populate_by_name": True,
    }

    def refresh_remaining(self) -> None:
        self.qty_remaining = max(self.qty_approved - self.qty_issued, 0)

    @property
    def issuable_balance(self) -> float:
        """Most that can still be issued on this line."""
        if self.qty_remaining > 0:
            return self.qty_remaining
        return self.qty_approved - self.qty_issued

    @property
    def unreceived_balance(self) -> float:
        return self.qty_issued - self.qty_received

    @property
    def is_fully_issued(self) -> bool:
        return self.qty_remaining == 0

    @property
    def is_fully_received(self) -> bool:
        return self.qty_received >= self.qty_issued

    def check_invariants(self) -> List[str]:
        """Return the violated quantity invariants, empty when the line is consistent."""
        problems = []
        if self.qty_requested <= 0:
            problems.append("qty_requested must be greater than 0")
        if min(self.qty_approved, self.qty_issued, self.qty_received) < 0:
            problems.append("quantities cannot be negative")
        if self.qty_issued > self.qty_approved:
            problems.append("qty_issued cannot exceed qty_approved")
        if self.qty_received > self.qty_issued:
            problems.append("qty_received cannot exceed qty_issued")
        return problems


class CommentModel(BaseModel):
    """Comment left on a request"""
    author: Actor
    text: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class StockRequestModel(BaseModel):
    """Database model for stock requests (the request aggregate)"""
    id: Optional[str] = Field(default=None, alias="_id")
    ref_no: str
    site_id: str
    requested_by: Actor
    status: RequestStatus = RequestStatus.PENDING
    notes: Optional[str] = None
    items: List[RequestItemModel]
    comments: List[CommentModel] = []

    approved_by: Optional[Actor] = None
    approved_at: Optional[datetime] = None
    issued_by: Optional[Actor] = None
    issued_at: Optional[datetime] = None
    received_at: Optional[datetime] = None
    rejected_by: Optional[Actor] = None
    rejected_at: Optional[datetime] = None
    closed_by: Optional[Actor] = None
    closed_at: Optional[datetime] = None

    version: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
        "validate_assignment": True,
        "json_schema_extra": {
            "example": {
                "ref_no": "REQ-202610-0001",
                "site_id": "60d21b4967d0d8992e610c86",
                "requested_by": {"kind": "employee", "id": "60d21b4967d0d8992e610c85"},
                "status": "PENDING",
                "notes": "Needed for the hatchery",
                "items": [
                    {"stock_in_id": "60d21b4967d0d8992e610c90", "qty_requested": 10}
                ]
            }
        }
    }

    def find_item(self, item_id: str) -> Optional[RequestItemModel]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def derive_issue_status(self) -> RequestStatus:
        if all(item.is_fully_issued for item in self.items):
            return RequestStatus.ISSUED
        return RequestStatus.PARTIALLY_ISSUED

    def to_document(self) -> dict:
        """Serialize for storage, without the ``_id`` key."""
        return self.model_dump(by_alias=True, exclude={"id"}, mode="python")
