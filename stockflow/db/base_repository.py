"""
Base repository pattern implementation for MongoDB collections.
"""
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from stockflow.core.errors import ConflictError
from stockflow.db.mongodb import get_collection
from stockflow.utils.datetime_handler import DateTimeHandler
from stockflow.utils.id_handler import IdHandler


class BaseRepository:
    """
    Base repository class that implements standard CRUD operations for MongoDB collections.
    Handles ID conversions, formatting, and standard error patterns.
    """

    def __init__(self, collection_name: str):
        """
        Initialize repository with a MongoDB collection name.

        Args:
            collection_name: Name of the collection backing this repository
        """
        self.collection_name = collection_name

    @property
    def collection(self):
        """Resolve the collection on each access so a reconnect is picked up."""
        return get_collection(self.collection_name)

    async def find_by_id(self, id_value: Any) -> Optional[Dict[str, Any]]:
        """
        Find a document by ID with consistent ID handling.

        Args:
            id_value: ID to look for (string or ObjectId)

        Returns:
            Document dict with formatted IDs or None if not found
        """
        document, _ = await IdHandler.find_document_by_id(self.collection, id_value)
        if document:
            return IdHandler.format_object_ids(document)
        return None

    async def find_by_ids(self, ids: List[Any]) -> Dict[str, Dict[str, Any]]:
        """
        Find several documents at once.

        Args:
            ids: IDs to look for

        Returns:
            Mapping of string ID to formatted document, for the IDs that exist
        """
        lookup = []
        for id_value in ids:
            obj_id = IdHandler.ensure_object_id(id_value)
            lookup.extend([obj_id, str(obj_id)] if obj_id else [id_value])

        if not lookup:
            return {}

        documents = await self.collection.find({"_id": {"$in": lookup}}).to_list(length=None)
        return {str(doc["_id"]): IdHandler.format_object_ids(doc) for doc in documents}

    async def exists(self, id_value: Any) -> bool:
        document, _ = await IdHandler.find_document_by_id(self.collection, id_value)
        return document is not None

    async def find_many(self,
                        query: Dict[str, Any] = None,
                        skip: int = 0,
                        limit: int = 0,
                        sort_by: str = "created_at",
                        sort_desc: bool = True) -> List[Dict[str, Any]]:
        """
        Find documents matching query with pagination.

        Args:
            query: MongoDB query dictionary
            skip: Number of documents to skip
            limit: Maximum number of documents to return, 0 for no limit
            sort_by: Field to sort by
            sort_desc: If True, sort in descending order

        Returns:
            List of documents with formatted IDs
        """
        if query is None:
            query = {}

        cursor = self.collection.find(query)

        if sort_by:
            cursor = cursor.sort(sort_by, -1 if sort_desc else 1)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        documents = await cursor.to_list(length=limit or None)
        return IdHandler.format_object_ids(documents)

    async def count(self, query: Dict[str, Any] = None) -> int:
        """
        Count documents matching query.

        Args:
            query: MongoDB query dictionary

        Returns:
            Count of matching documents
        """
        if query is None:
            query = {}
        return await self.collection.count_documents(query)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new document.

        Args:
            data: Document data

        Returns:
            Created document with formatted IDs

        Raises:
            ConflictError: If a unique index rejects the document
        """
        now = DateTimeHandler.get_current_datetime()
        data.setdefault("created_at", now)
        data.setdefault("updated_at", now)

        try:
            result = await self.collection.insert_one(data)
        except DuplicateKeyError as e:
            raise ConflictError(f"A {self.collection_name} document with the same unique key already exists") from e

        return await self.find_by_id(result.inserted_id)

    async def update(self, id_value: Any, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update a document by ID.

        Args:
            id_value: ID of document to update
            data: New field values

        Returns:
            Updated document with formatted IDs or None if not found
        """
        document, doc_id = await IdHandler.find_document_by_id(self.collection, id_value)
        if not document:
            return None

        update_data = {k: v for k, v in data.items() if k != "_id"}
        update_data["updated_at"] = DateTimeHandler.get_current_datetime()

        try:
            await self.collection.update_one({"_id": doc_id}, {"$set": update_data})
        except DuplicateKeyError as e:
            raise ConflictError(f"A {self.collection_name} document with the same unique key already exists") from e

        return await self.find_by_id(doc_id)

    async def delete(self, id_value: Any) -> bool:
        """
        Delete a document by ID.

        Args:
            id_value: ID of document to delete

        Returns:
            True if document was deleted, False if not found
        """
        document, doc_id = await IdHandler.find_document_by_id(self.collection, id_value)
        if not document:
            return False

        result = await self.collection.delete_one({"_id": doc_id})
        return result.deleted_count > 0

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single document matching query.

        Args:
            query: MongoDB query dictionary

        Returns:
            Document dict with formatted IDs or None if not found
        """
        document = await self.collection.find_one(query)
        if document:
            return IdHandler.format_object_ids(document)
        return None
