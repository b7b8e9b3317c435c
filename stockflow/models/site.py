# stockflow/models/site.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class SiteModel(BaseModel):
    """Database model for sites that request stock"""
    name: str
    code: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    manager_id: Optional[str] = None
    supervisor_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def check_distinct_manager(self):
        if self.manager_id and self.supervisor_id and self.manager_id == self.supervisor_id:
            raise ValueError("Manager and Supervisor cannot be the same employee")
        return self
