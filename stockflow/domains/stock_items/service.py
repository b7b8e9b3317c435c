"""
Stock item service for business logic.
"""
import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional

from stockflow.core.errors import NotFoundError, ValidationError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.stock_categories.repository import StockCategoryRepository
from stockflow.domains.stock_items.repository import StockItemRepository
from stockflow.domains.stores.repository import StoreRepository
from stockflow.models.stock import StockItemModel
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)


def generate_sku(product_name: str) -> str:
    """
    Build a SKU from the initials of the product name plus 4 random hex characters.

    Args:
        product_name: Product name, e.g. "Fish Feed Pellets"

    Returns:
        SKU such as ``FFP3a9c``
    """
    initials = "".join(word[0] for word in product_name.split() if word).upper()
    return f"{initials}{uuid.uuid4().hex[:4]}"


class StockItemService:
    """
    Service for stock item business logic.
    """

    def __init__(
            self,
            stock_item_repo: Optional[StockItemRepository] = None,
            category_repo: Optional[StockCategoryRepository] = None,
            store_repo: Optional[StoreRepository] = None
    ):
        """
        Initialize with repositories.

        Args:
            stock_item_repo: Optional stock item repository instance
            category_repo: Optional stock category repository instance
            store_repo: Optional store repository instance
        """
        self.stock_item_repo = stock_item_repo or StockItemRepository()
        self.category_repo = category_repo or StockCategoryRepository()
        self.store_repo = store_repo or StoreRepository()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a stock item.

        Args:
            data: Stock item fields; ``sku`` is generated when omitted

        Returns:
            Created stock item with category and store embedded

        Raises:
            ValidationError: On blank name, negative quantity or price, unknown category or store
        """
        self._validate_fields(data, creating=True)

        category, store = await asyncio.gather(
            self.category_repo.find_by_id(data["category_id"]),
            self.store_repo.find_by_id(data["store_id"])
        )
        if not category:
            raise ValidationError("Category does not exist")
        if not store:
            raise ValidationError("Store does not exist")

        if not data.get("sku"):
            data["sku"] = generate_sku(data["product_name"])

        stock_item = StockItemModel(**data)
        created = await self.stock_item_repo.create(stock_item.model_dump())
        created = self._embed(created, category, store)

        logger.info(f"Created stock item {created['product_name']} ({created['sku']})")
        await broadcaster.publish(PermissionArea.STOCK, "stockInCreated", created)
        return created

    async def find_all(self) -> List[Dict[str, Any]]:
        """Get all stock items, newest first, with category and store embedded."""
        stock_items = await self.stock_item_repo.find_many()

        categories, stores = await asyncio.gather(
            self.category_repo.find_by_ids(list({item.get("category_id") for item in stock_items})),
            self.store_repo.find_by_ids(list({item.get("store_id") for item in stock_items}))
        )
        return [
            self._embed(item, categories.get(item.get("category_id")), stores.get(item.get("store_id")))
            for item in stock_items
        ]

    async def find_one(self, stock_id: str) -> Dict[str, Any]:
        stock_item = await self.stock_item_repo.find_by_id(stock_id)
        if not stock_item:
            raise NotFoundError("Stock item not found")
        return await self._hydrate(stock_item)

    async def update(self, stock_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a stock item. Omitted fields keep their value.

        Raises:
            ValidationError: On invalid values or unknown category or store
            NotFoundError: If the stock item does not exist
        """
        self._validate_fields(data, creating=False)

        checks = []
        if data.get("category_id"):
            checks.append(self._ensure_exists(self.category_repo, data["category_id"], "Category does not exist"))
        if data.get("store_id"):
            checks.append(self._ensure_exists(self.store_repo, data["store_id"], "Store does not exist"))
        await asyncio.gather(*checks)

        updated = await self.stock_item_repo.update(stock_id, data)
        if not updated:
            raise NotFoundError("Stock item not found")

        updated = await self._hydrate(updated)
        await broadcaster.publish(PermissionArea.STOCK, "stockInUpdated", updated)
        return updated

    async def remove(self, stock_id: str) -> Dict[str, str]:
        if not await self.stock_item_repo.delete(stock_id):
            raise NotFoundError("Stock item not found or already deleted")

        logger.info(f"Deleted stock item {stock_id}")
        await broadcaster.publish(PermissionArea.STOCK, "stockInDeleted", {"id": stock_id})
        return {"id": stock_id}

    @staticmethod
    def _validate_fields(data: Dict[str, Any], creating: bool) -> None:
        if creating or "product_name" in data:
            data["product_name"] = (data.get("product_name") or "").strip()
            if not data["product_name"]:
                raise ValidationError("Product name is required" if creating else "Product name cannot be empty")
        if creating and not data.get("unit"):
            raise ValidationError("Unit is required")
        if data.get("quantity") is not None and data["quantity"] < 0:
            raise ValidationError("Quantity cannot be negative")
        if data.get("unit_price") is not None and data["unit_price"] < 0:
            raise ValidationError("Unit price cannot be negative")

    @staticmethod
    async def _ensure_exists(repo, record_id: str, message: str) -> None:
        if not await repo.exists(record_id):
            raise ValidationError(message)

    async def _hydrate(self, stock_item: Dict[str, Any]) -> Dict[str, Any]:
        category, store = await asyncio.gather(
            self.category_repo.find_by_id(stock_item.get("category_id")),
            self.store_repo.find_by_id(stock_item.get("store_id"))
        )
        return self._embed(stock_item, category, store)

    @staticmethod
    def _embed(stock_item: Dict[str, Any], category: Optional[Dict[str, Any]],
               store: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        result = dict(stock_item)
        result["category"] = category
        result["store"] = store
        return result


# Create global instance
stock_item_service = StockItemService()
