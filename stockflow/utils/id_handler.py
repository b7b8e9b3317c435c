"""
ID Handler module for consistent MongoDB ObjectId handling throughout the application.
"""
from typing import Any, Dict, List, Optional, Tuple, Union

from bson import ObjectId


class IdHandler:
    """
    Centralized service for handling MongoDB ObjectIds consistently throughout the application.
    Provides methods for conversion, validation, and standardized document lookup.
    """

    @staticmethod
    def ensure_object_id(id_value: Any) -> Optional[ObjectId]:
        """
        Safely convert a string or ObjectId to an ObjectId.
        Returns None if conversion is not possible.

        Args:
            id_value: Value to convert to ObjectId (string or ObjectId)

        Returns:
            ObjectId or None if conversion failed
        """
        if id_value is None:
            return None

        if isinstance(id_value, ObjectId):
            return id_value

        if isinstance(id_value, str) and ObjectId.is_valid(id_value):
            return ObjectId(id_value)

        return None

    @staticmethod
    def format_object_ids(data: Union[Dict[str, Any], List[Any], None]) -> Union[Dict[str, Any], List[Any], None]:
        """
        Convert ObjectId to strings in a document or list of documents.
        Works recursively for nested dictionaries and lists.

        Args:
            data: MongoDB document or list of documents

        Returns:
            Document(s) with ObjectIds converted to strings
        """
        if data is None:
            return None

        if isinstance(data, list):
            return [IdHandler.format_object_ids(item) for item in data]
        elif isinstance(data, dict):
            result = {}
            for key, value in data.items():
                if isinstance(value, ObjectId):
                    result[key] = str(value)
                elif isinstance(value, (dict, list)):
                    result[key] = IdHandler.format_object_ids(value)
                else:
                    result[key] = value
            return result
        elif isinstance(data, ObjectId):
            return str(data)
        else:
            return data

    @staticmethod
    def id_query(doc_id: Any) -> Dict[str, Any]:
        """
        Build an ``_id`` filter matching either the ObjectId or the raw string form.

        Args:
            doc_id: ID to look for

        Returns:
            MongoDB filter
        """
        obj_id = IdHandler.ensure_object_id(doc_id)
        if obj_id is not None:
            return {"_id": {"$in": [obj_id, str(obj_id)]}}
        return {"_id": doc_id}

    @staticmethod
    async def find_document_by_id(collection, doc_id: Any) -> Tuple[Any, Any]:
        """
        Standard method to find a document by ID using a consistent lookup strategy.
        Returns a tuple of (document, object_id) if found, or (None, None) if not found.

        Args:
            collection: MongoDB collection to query
            doc_id: ID to look for

        Returns:
            Tuple of (document, id_used_for_lookup)
        """
        if doc_id is None:
            return None, None

        document = await collection.find_one(IdHandler.id_query(doc_id))
        if document:
            return document, document["_id"]

        return None, None

    @staticmethod
    def generate_id() -> str:
        """
        Generate a new ObjectId as string

        Returns:
            String representation of a new ObjectId
        """
        return str(ObjectId())
