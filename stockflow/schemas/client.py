"""
Client schema models for validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from stockflow.models.client import ClientStatus
from stockflow.schemas.base import ApiModel


class ClientCreate(ApiModel):
    firstname: str
    lastname: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientUpdate(ApiModel):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    status: Optional[ClientStatus] = None


class ClientResponse(BaseModel):
    id: str = Field(..., alias="_id")
    firstname: str
    lastname: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    status: ClientStatus
    created_at: datetime
    updated_at: datetime

    model_config = {
        "populate_by_name": True,
    }
