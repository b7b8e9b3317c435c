"""
Stock item repository for database operations.
"""
from typing import Any, Dict, Optional

from pymongo import ReturnDocument

from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import STOCK_ITEMS
from stockflow.utils.datetime_handler import DateTimeHandler
from stockflow.utils.id_handler import IdHandler


class StockItemRepository(BaseRepository):
    """
    Repository for stock item data access.
    Extends BaseRepository with atomic quantity adjustments.
    """

    def __init__(self):
        """Initialize with stock items collection."""
        super().__init__(STOCK_ITEMS)

    async def find_by_sku(self, sku: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"sku": sku})

    async def decrement_quantity(self, stock_id: str, qty: float) -> Optional[Dict[str, Any]]:
        """
        Take ``qty`` out of stock only if at least that much is on hand.

        Args:
            stock_id: Stock item ID
            qty: Quantity to remove

        Returns:
            Stock item after the decrement, or None if the item is missing or short
        """
        query = IdHandler.id_query(stock_id)
        query["quantity"] = {"$gte": qty}

        document = await self.collection.find_one_and_update(
            query,
            {
                "$inc": {"quantity": -qty},
                "$set": {"updated_at": DateTimeHandler.get_current_datetime()}
            },
            return_document=ReturnDocument.AFTER
        )
        return IdHandler.format_object_ids(document) if document else None

    async def increment_quantity(self, stock_id: str, qty: float) -> Optional[Dict[str, Any]]:
        """
        Put ``qty`` back into stock.

        Args:
            stock_id: Stock item ID
            qty: Quantity to add

        Returns:
            Stock item after the increment, or None if not found
        """
        document = await self.collection.find_one_and_update(
            IdHandler.id_query(stock_id),
            {
                "$inc": {"quantity": qty},
                "$set": {"updated_at": DateTimeHandler.get_current_datetime()}
            },
            return_document=ReturnDocument.AFTER
        )
        return IdHandler.format_object_ids(document) if document else None

    async def count_by_category(self, category_id: str) -> int:
        return await self.count({"category_id": category_id})

    async def count_by_store(self, store_id: str) -> int:
        return await self.count({"store_id": store_id})
