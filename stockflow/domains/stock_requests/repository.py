"""
Stock request repository for database operations.
"""
import re
from typing import Any, Dict, Optional

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import STOCK_REQUESTS
from stockflow.utils.datetime_handler import DateTimeHandler
from stockflow.utils.id_handler import IdHandler


class StockRequestRepository(BaseRepository):
    """
    Repository for stock request aggregates.
    A request and its items live in one document and are written together.
    """

    def __init__(self):
        """Initialize with stock requests collection."""
        super().__init__(STOCK_REQUESTS)

    async def find_last_ref_no(self, prefix: str) -> Optional[str]:
        """
        Find the highest reference number starting with ``prefix``.

        Args:
            prefix: Reference prefix including the month, e.g. ``REQ-202610-``

        Returns:
            The reference number or None if the month has none yet
        """
        cursor = self.collection.find(
            {"ref_no": {"$regex": f"^{re.escape(prefix)}"}},
            {"ref_no": 1}
        ).sort("ref_no", -1).limit(1)

        documents = await cursor.to_list(length=1)
        return documents[0]["ref_no"] if documents else None

    async def save_versioned(self, request_id: str, expected_version: int, document: Dict[str, Any]) -> bool:
        """
        Replace the stored aggregate only if nobody else wrote it since it was read.

        Args:
            request_id: Request ID
            expected_version: Version the caller read
            document: Full aggregate document without ``_id``

        Returns:
            True if the write won, False if the version check failed
        """
        query = IdHandler.id_query(request_id)
        query["version"] = expected_version

        update_data = {k: v for k, v in document.items() if k != "_id"}
        update_data["version"] = expected_version + 1
        update_data["updated_at"] = DateTimeHandler.get_current_datetime()

        result = await self.collection.update_one(query, {"$set": update_data})
        return result.matched_count == 1
