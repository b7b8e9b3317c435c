"""
Client service for business logic.
"""
import logging
from typing import Any, Dict, List, Optional

from stockflow.core.errors import ConflictError, NotFoundError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.clients.repository import ClientRepository
from stockflow.models.client import ClientModel, ClientStatus
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)


class ClientService:
    """
    Service for client business logic. Email and phone are unique among clients.
    """

    def __init__(self, client_repo: Optional[ClientRepository] = None):
        self.client_repo = client_repo or ClientRepository()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a client. New clients are always ACTIVE.

        Raises:
            ConflictError: If the email or phone is already used
        """
        await self._ensure_unique_contact(data.get("email"), data.get("phone"))

        data["status"] = ClientStatus.ACTIVE
        client = ClientModel(**data)
        created = await self.client_repo.create(client.model_dump())

        logger.info(f"Created client {created['email']}")
        await broadcaster.publish(PermissionArea.CLIENTS, "clientCreated", created)
        return created

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self.client_repo.find_many()

    async def find_one(self, client_id: str) -> Dict[str, Any]:
        client = await self.client_repo.find_by_id(client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def update(self, client_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        existing = await self.client_repo.find_by_id(client_id)
        if not existing:
            raise NotFoundError("Client not found")

        await self._ensure_unique_contact(data.get("email"), data.get("phone"), exclude_id=existing["_id"])

        updated = await self.client_repo.update(client_id, data)
        await broadcaster.publish(PermissionArea.CLIENTS, "clientUpdated", updated)
        return updated

    async def remove(self, client_id: str) -> Dict[str, str]:
        if not await self.client_repo.delete(client_id):
            raise NotFoundError("Client not found")

        logger.info(f"Deleted client {client_id}")
        await broadcaster.publish(PermissionArea.CLIENTS, "clientDeleted", {"id": client_id})
        return {"id": client_id}

    async def _ensure_unique_contact(self, email: Optional[str], phone: Optional[str],
                                     exclude_id: Optional[str] = None) -> None:
        if email:
            match = await self.client_repo.find_by_email(email)
            if match and match["_id"] != exclude_id:
                raise ConflictError("Email already exists")
        if phone:
            match = await self.client_repo.find_by_phone(phone)
            if match and match["_id"] != exclude_id:
                raise ConflictError("Phone number already exists")


# Create global instance
client_service = ClientService()
