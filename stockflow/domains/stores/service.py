"""
Store service for business logic.
"""
import logging
from typing import Any, Dict, Optional

from stockflow.core.config import settings
from stockflow.core.errors import NotFoundError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.stores.repository import StoreRepository
from stockflow.models.store import StoreModel
from stockflow.realtime.broadcaster import broadcaster
from stockflow.schemas.base import build_pagination, page_to_skip

logger = logging.getLogger(__name__)


class StoreService:
    """
    Service for store-related business logic.
    """

    def __init__(self, store_repo: Optional[StoreRepository] = None):
        """
        Initialize with store repository.

        Args:
            store_repo: Optional store repository instance
        """
        self.store_repo = store_repo or StoreRepository()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new store.

        Args:
            data: Store data

        Returns:
            Created store document
        """
        store = StoreModel(**data)
        created = await self.store_repo.create(store.model_dump())

        logger.info(f"Created store {created['code']} - {created['name']}")
        await broadcaster.publish(PermissionArea.STORES, "storeCreated", created)
        return created

    async def find_all(self, page: int = 1, limit: Optional[int] = None, search: Optional[str] = None) -> Dict[str, Any]:
        """
        Get stores with optional search.

        Args:
            page: Page number (1-based)
            limit: Page size
            search: Matches name, location or code, case-insensitive

        Returns:
            ``{"data": [...], "pagination": {...}}``
        """
        page = max(page, 1)
        limit = limit or settings.DEFAULT_PAGE_SIZE

        stores, total = await self.store_repo.search(search, page_to_skip(page, limit), limit)
        return {"data": stores, "pagination": build_pagination(page, limit, total)}

    async def find_one(self, store_id: str) -> Dict[str, Any]:
        store = await self.store_repo.find_by_id(store_id)
        if not store:
            raise NotFoundError(f"Store with ID {store_id} not found")
        return store

    async def update(self, store_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update an existing store.

        Args:
            store_id: Store ID
            data: Fields to change

        Returns:
            Updated store document

        Raises:
            NotFoundError: If the store does not exist
        """
        updated = await self.store_repo.update(store_id, data)
        if not updated:
            raise NotFoundError(f"Store with ID {store_id} not found")

        await broadcaster.publish(PermissionArea.STORES, "storeUpdated", updated)
        return updated

    async def remove(self, store_id: str) -> Dict[str, str]:
        if not await self.store_repo.delete(store_id):
            raise NotFoundError(f"Store with ID {store_id} not found")

        logger.info(f"Deleted store {store_id}")
        await broadcaster.publish(PermissionArea.STORES, "storeDeleted", {"id": store_id})
        return {"id": store_id}


# Create global instance
store_service = StoreService()
