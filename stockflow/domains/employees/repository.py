"""
Employee repository.

Employees are managed by the HR service; this service only reads them to
validate and embed references.
"""
from typing import Any, Dict, Optional

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import EMPLOYEES


class EmployeeRepository(BaseRepository):
    """Read access to employee records."""

    def __init__(self):
        """Initialize with employees collection."""
        super().__init__(EMPLOYEES)

    @staticmethod
    def summarize(employee: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Keep only the fields safe to embed in other records."""
        if not employee:
            return None
        return {key: employee.get(key) for key in ("_id", "firstname", "lastname", "email") if key in employee}
