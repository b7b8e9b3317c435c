"""
Stock history repository for database operations.
"""
from typing import Any, Dict, List

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import STOCK_HISTORY
from stockflow.utils.id_handler import IdHandler


class StockHistoryRepository(BaseRepository):
    """
    Repository for the stock movement ledger.
    History records are append-only.
    """

    def __init__(self):
        """Initialize with stock history collection."""
        super().__init__(STOCK_HISTORY)

    async def create_many(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Insert several movement records at once.

        Args:
            records: Movement documents

        Returns:
            Inserted documents with formatted IDs, in input order
        """
        if not records:
            return []

        result = await self.collection.insert_many(records)
        for record, inserted_id in zip(records, result.inserted_ids):
            record["_id"] = inserted_id
        return IdHandler.format_object_ids(records)

    async def find_by_stock_item(self, stock_id: str) -> List[Dict[str, Any]]:
        return await self.find_many({"stock_in_id": stock_id})

    async def find_by_source(self, source_id: str) -> List[Dict[str, Any]]:
        return await self.find_many({"source_id": source_id})

    async def find_by_movement_type(self, movement_type: str) -> List[Dict[str, Any]]:
        return await self.find_many({"movement_type": movement_type})
