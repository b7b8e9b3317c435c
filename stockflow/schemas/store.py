"""
Store schema models for validation.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from stockflow.schemas.base import ApiModel, Pagination


class StoreBase(ApiModel):
    """Base store schema with common fields."""
    code: str
    name: str
    location: str
    description: Optional[str] = None
    manager_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None


class StoreCreate(StoreBase):
    """Schema for creating stores."""
    pass


class StoreUpdate(ApiModel):
    """Schema for updating stores."""
    code: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    manager_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None


class StoreResponse(BaseModel):
    """Schema for store responses."""
    id: str = Field(..., alias="_id")
    code: str
    name: str
    location: str
    description: Optional[str] = None
    manager_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "populate_by_name": True,
    }


class StorePage(BaseModel):
    data: List[StoreResponse]
    pagination: Pagination
