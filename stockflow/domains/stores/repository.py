"""
Store repository for database operations.
"""
import re
from typing import Any, Dict, List, Optional, Tuple

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import STORES


class StoreRepository(BaseRepository):
    """
    Repository for store data access.
    Extends BaseRepository with store search.
    """

    def __init__(self):
        """Initialize with stores collection."""
        super().__init__(STORES)

    @staticmethod
    def build_search_query(search: Optional[str]) -> Dict[str, Any]:
        """
        Build a case-insensitive search across name, location and code.

        Args:
            search: Free text to look for

        Returns:
            MongoDB query dictionary
        """
        if not search:
            return {}

        pattern = {"$regex": re.escape(search), "$options": "i"}
        return {"$or": [{"name": pattern}, {"location": pattern}, {"code": pattern}]}

    async def search(self, search: Optional[str], skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Find one page of stores matching the search text.

        Returns:
            Tuple of (stores, total matching count)
        """
        query = self.build_search_query(search)
        stores = await self.find_many(query, skip, limit)
        total = await self.count(query)
        return stores, total
