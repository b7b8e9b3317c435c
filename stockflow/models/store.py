# stockflow/models/store.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class StoreModel(BaseModel):
    """Database model for stores holding stock"""
    code: str
    name: str
    location: str
    description: Optional[str] = None
    manager_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "json_schema_extra": {
            "example": {
                "code": "ST-001",
                "name": "Main Warehouse",
                "location": "Kigali",
                "manager_name": "Jane Doe",
                "contact_phone": "555-123-4567",
                "contact_email": "warehouse@example.com"
            }
        }
    }
