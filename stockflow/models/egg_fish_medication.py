# stockflow/models/egg_fish_medication.py
from datetime import datetime

from pydantic import BaseModel, Field


class EggFishMedicationModel(BaseModel):
    """Database model for a medication dose given to an egg batch"""
    parent_egg_migration_id: str
    medication_id: str
    employee_id: str
    quantity: float = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
