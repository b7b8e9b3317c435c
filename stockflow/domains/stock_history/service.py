"""
Stock history service: read access to the stock movement ledger.
"""
from typing import Any, Dict, List, Optional

from stockflow.core.errors import ValidationError
from stockflow.domains.stock_history.repository import StockHistoryRepository
from stockflow.domains.stock_items.repository import StockItemRepository
from stockflow.models.stock import MovementType


class StockHistoryService:
    """
    Service for stock history queries. All results are newest first and
    carry the stock item they refer to.
    """

    def __init__(
            self,
            history_repo: Optional[StockHistoryRepository] = None,
            stock_item_repo: Optional[StockItemRepository] = None
    ):
        self.history_repo = history_repo or StockHistoryRepository()
        self.stock_item_repo = stock_item_repo or StockItemRepository()

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self._with_stock_items(await self.history_repo.find_many())

    async def find_by_stock_item(self, stock_id: str) -> List[Dict[str, Any]]:
        return await self._with_stock_items(await self.history_repo.find_by_stock_item(stock_id))

    async def find_by_request(self, request_id: str) -> List[Dict[str, Any]]:
        return await self._with_stock_items(await self.history_repo.find_by_source(request_id))

    async def find_by_movement_type(self, movement_type: str) -> List[Dict[str, Any]]:
        """
        Get movements of one type.

        Raises:
            ValidationError: If the movement type is not IN, OUT or ADJUSTMENT
        """
        try:
            movement = MovementType((movement_type or "").upper())
        except ValueError:
            raise ValidationError(f"Invalid movement type: {movement_type}")

        return await self._with_stock_items(await self.history_repo.find_by_movement_type(movement.value))

    async def _with_stock_items(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        stocks = await self.stock_item_repo.find_by_ids(list({record["stock_in_id"] for record in records}))
        return [dict(record, stock_in=stocks.get(record["stock_in_id"])) for record in records]


# Create global instance
stock_history_service = StockHistoryService()
