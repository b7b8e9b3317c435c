"""
Egg-fish medication schema models for validation.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from stockflow.schemas.base import ApiModel


class EggFishMedicationCreate(ApiModel):
    """Schema for recording a medication dose. The acting employee comes from the token."""
    parent_egg_migration_id: str
    medication_id: str
    quantity: Optional[float] = None


class EggFishMedicationUpdate(ApiModel):
    parent_egg_migration_id: Optional[str] = None
    medication_id: Optional[str] = None
    quantity: Optional[float] = None


class EggFishMedicationResponse(BaseModel):
    """Schema for medication responses, with related records embedded."""
    id: str = Field(..., alias="_id")
    parent_egg_migration_id: str
    medication_id: str
    employee_id: str
    quantity: float
    created_at: datetime
    updated_at: datetime
    parent_egg_migration: Optional[Dict[str, Any]] = None
    medication: Optional[Dict[str, Any]] = None
    employee: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }
