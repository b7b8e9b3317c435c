"""
Client repository for database operations.
"""
from typing import Any, Dict, Optional

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import CLIENTS


class ClientRepository(BaseRepository):
    """
    Repository for client data access.
    Extends BaseRepository with contact lookups.
    """

    def __init__(self):
        """Initialize with clients collection."""
        super().__init__(CLIENTS)

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"email": email})

    async def find_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"phone": phone})
