"""
Site schema models for validation.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from stockflow.schemas.base import ApiModel


class SiteCreate(ApiModel):
    name: str
    code: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    manager_id: Optional[str] = None
    supervisor_id: Optional[str] = None


class SiteUpdate(ApiModel):
    name: Optional[str] = None
    code: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    manager_id: Optional[str] = None
    supervisor_id: Optional[str] = None


class SiteResponse(BaseModel):
    """Schema for site responses, with manager and supervisor embedded."""
    id: str = Field(..., alias="_id")
    name: str
    code: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    manager_id: Optional[str] = None
    supervisor_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    manager: Optional[Dict[str, Any]] = None
    supervisor: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }
