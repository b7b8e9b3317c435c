"""
Site repository for database operations.
"""
from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import SITES


class SiteRepository(BaseRepository):
    """Repository for site data access."""

    def __init__(self):
        """Initialize with sites collection."""
        super().__init__(SITES)
