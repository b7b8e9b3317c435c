"""
Stock request schema models for validation.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from stockflow.models.actor import Actor
from stockflow.models.stock_request import RequestStatus
from stockflow.schemas.base import ApiModel, Envelope, Pagination


class RequestItemCreate(ApiModel):
    """One line of a new request."""
    stock_in_id: str
    qty_requested: float


class StockRequestCreate(ApiModel):
    """Schema for creating stock requests."""
    site_id: str
    notes: Optional[str] = None
    items: List[RequestItemCreate] = []


class ItemModification(ApiModel):
    """Change to an existing request line during approval."""
    request_item_id: str
    stock_in_id: Optional[str] = None
    qty_requested: Optional[float] = None
    qty_approved: Optional[float] = None


class ItemToAdd(ApiModel):
    stock_in_id: str
    qty_requested: float
    qty_approved: Optional[float] = None


class StockRequestApprove(ApiModel):
    """Schema for approve and modify-approve."""
    item_modifications: List[ItemModification] = []
    items_to_add: List[ItemToAdd] = []
    items_to_remove: List[str] = []
    comment: Optional[str] = None


class StockRequestReject(ApiModel):
    notes: Optional[str] = None


class CommentCreate(ApiModel):
    description: str


class IssueLine(ApiModel):
    request_item_id: str
    qty_issued: float
    notes: Optional[str] = None


class IssueMaterials(ApiModel):
    """Schema for issuing approved quantities out of stock."""
    request_id: str
    items: List[IssueLine] = []


class ReceiveLine(ApiModel):
    request_item_id: str
    qty_received: float


class ReceiveMaterials(ApiModel):
    """Schema for confirming receipt of issued quantities."""
    request_id: str
    items: List[ReceiveLine] = []


class RequestItemResponse(BaseModel):
    id: str = Field(..., alias="_id")
    stock_in_id: str
    qty_requested: float
    qty_approved: float
    qty_issued: float
    qty_remaining: float
    qty_received: float
    created_at: datetime
    stock_in: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }


class CommentResponse(BaseModel):
    author: Actor
    text: str
    created_at: datetime


class StockRequestResponse(BaseModel):
    """Schema for stock request responses, with site and stock items embedded."""
    id: str = Field(..., alias="_id")
    ref_no: str
    site_id: str
    requested_by: Actor
    status: RequestStatus
    notes: Optional[str] = None
    items: List[RequestItemResponse]
    comments: List[CommentResponse] = []
    approved_by: Optional[Actor] = None
    approved_at: Optional[datetime] = None
    issued_by: Optional[Actor] = None
    issued_at: Optional[datetime] = None
    received_at: Optional[datetime] = None
    rejected_by: Optional[Actor] = None
    rejected_at: Optional[datetime] = None
    closed_by: Optional[Actor] = None
    closed_at: Optional[datetime] = None
    version: int
    created_at: datetime
    updated_at: datetime
    site: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }


class StockRequestPage(BaseModel):
    requests: List[StockRequestResponse]
    pagination: Pagination


class IssueResult(BaseModel):
    """Result of issuing materials."""
    request: StockRequestResponse
    issued_items: List[RequestItemResponse]
    stock_history_records: List[Dict[str, Any]]


class ReceiveResult(BaseModel):
    """Result of receiving materials."""
    request: StockRequestResponse
    received_items: List[RequestItemResponse]
    stock_history_records: List[Dict[str, Any]]


StockRequestEnvelope = Envelope[StockRequestResponse]
StockRequestPageEnvelope = Envelope[StockRequestPage]
IssueEnvelope = Envelope[IssueResult]
ReceiveEnvelope = Envelope[ReceiveResult]
DeletedEnvelope = Envelope[Dict[str, str]]
