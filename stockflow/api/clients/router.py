"""
Client API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.clients.service import client_service
from stockflow.schemas.client import ClientCreate, ClientResponse, ClientUpdate

router = APIRouter()


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(client_data: ClientCreate, actor: Actor = Depends(has_permission("clients:write"))):
    """
    Create a client.

    Raises:
        ConflictError: If the email or phone is already registered
    """
    return await client_service.create(client_data.model_dump(mode="json"))


@router.get("/", response_model=List[ClientResponse])
async def get_clients(actor: Actor = Depends(has_permission("clients:read"))):
    return await client_service.find_all()


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, actor: Actor = Depends(has_permission("clients:read"))):
    return await client_service.find_one(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
        client_id: str,
        client_data: ClientUpdate,
        actor: Actor = Depends(has_permission("clients:write"))
):
    return await client_service.update(client_id, client_data.model_dump(exclude_unset=True, mode="json"))


@router.delete("/{client_id}")
async def delete_client(client_id: str, actor: Actor = Depends(has_permission("clients:delete"))):
    return await client_service.remove(client_id)
