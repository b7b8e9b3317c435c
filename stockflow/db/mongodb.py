"""
MongoDB connection management.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from stockflow.core.config import settings

logger = logging.getLogger(__name__)

# Collection names
STOCK_REQUESTS = "stock_requests"
STOCK_ITEMS = "stock_items"
STOCK_CATEGORIES = "stock_categories"
STOCK_HISTORY = "stock_history"
STORES = "stores"
SITES = "sites"
CLIENTS = "clients"
EGG_FISH_MEDICATIONS = "egg_fish_medications"
EMPLOYEES = "employees"
MEDICINES = "medicines"
PARENT_EGG_MIGRATIONS = "parent_egg_migrations"


class MongoDB:
    """
    MongoDB connection manager.
    Provides access to database and collections with connection management.
    """

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

    @classmethod
    def connect_to_mongodb(cls):
        """
        Connect to MongoDB if not already connected.
        Motor connects lazily, so this is safe to call outside an event loop.
        """
        if cls.client is None:
            logger.info(f"Connecting to MongoDB at {settings.MONGODB_URL} (database: {settings.MONGODB_DB})")
            cls.client = AsyncIOMotorClient(settings.MONGODB_URL)
            cls.db = cls.client[settings.MONGODB_DB]

    @classmethod
    async def close_mongodb_connection(cls):
        """
        Close MongoDB connection if open.
        """
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Closed MongoDB connection")

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        """
        Get database instance, connecting on first use.

        Returns:
            AsyncIOMotorDatabase instance
        """
        if cls.db is None:
            cls.connect_to_mongodb()
        return cls.db

    @classmethod
    def get_collection(cls, collection_name: str):
        """
        Get collection by name.

        Args:
            collection_name: Name of collection

        Returns:
            AsyncIOMotorCollection instance
        """
        return cls.get_database()[collection_name]


mongodb = MongoDB()


def get_collection(name: str):
    return mongodb.get_collection(name)


def get_database():
    return mongodb.get_database()


async def ensure_indexes():
    """Create the indexes the services rely on for uniqueness and sorting."""
    db = get_database()
    await db[STOCK_REQUESTS].create_index("ref_no", unique=True)
    await db[STOCK_REQUESTS].create_index([("status", 1), ("created_at", -1)])
    await db[STOCK_ITEMS].create_index("sku", unique=True)
    await db[STOCK_HISTORY].create_index([("stock_in_id", 1), ("created_at", -1)])
    await db[STOCK_HISTORY].create_index("source_id")
