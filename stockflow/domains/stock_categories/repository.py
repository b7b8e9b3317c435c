"""
Stock category repository for database operations.
"""
from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import STOCK_CATEGORIES


class StockCategoryRepository(BaseRepository):
    """Repository for stock category data access."""

    def __init__(self):
        """Initialize with stock categories collection."""
        super().__init__(STOCK_CATEGORIES)
