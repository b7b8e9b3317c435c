"""
Stock category service for business logic.
"""
import logging
from typing import Any, Dict, List, Optional

from stockflow.core.errors import NotFoundError, ValidationError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.stock_categories.repository import StockCategoryRepository
from stockflow.models.stock import StockCategoryModel
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)


class StockCategoryService:
    """
    Service for stock category business logic.
    """

    def __init__(self, category_repo: Optional[StockCategoryRepository] = None):
        self.category_repo = category_repo or StockCategoryRepository()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a category.

        Raises:
            ValidationError: If the name is blank
        """
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("Category name is required")

        category = StockCategoryModel(name=name, description=data.get("description"))
        created = await self.category_repo.create(category.model_dump())

        logger.info(f"Created stock category {name}")
        await broadcaster.publish(PermissionArea.STOCK, "categoryCreated", created)
        return created

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self.category_repo.find_many()

    async def find_one(self, category_id: str) -> Dict[str, Any]:
        category = await self.category_repo.find_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    async def update(self, category_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a category. Omitted fields keep their value.

        Raises:
            ValidationError: If the name is given but blank
            NotFoundError: If the category does not exist
        """
        if "name" in data:
            data["name"] = (data["name"] or "").strip()
            if not data["name"]:
                raise ValidationError("Category name cannot be empty")

        updated = await self.category_repo.update(category_id, data)
        if not updated:
            raise NotFoundError("Category not found")

        await broadcaster.publish(PermissionArea.STOCK, "categoryUpdated", updated)
        return updated

    async def remove(self, category_id: str) -> Dict[str, str]:
        if not await self.category_repo.delete(category_id):
            raise NotFoundError("Category not found or already deleted")

        logger.info(f"Deleted stock category {category_id}")
        await broadcaster.publish(PermissionArea.STOCK, "categoryDeleted", {"id": category_id})
        return {"id": category_id}


# Create global instance
stock_category_service = StockCategoryService()
