"""
Store API routes for store management.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.stores.service import store_service
from stockflow.schemas.store import StoreCreate, StorePage, StoreResponse, StoreUpdate

router = APIRouter()


@router.post("/", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
        store_data: StoreCreate,
        actor: Actor = Depends(has_permission("stores:write"))
):
    """
    Create new store.

    Args:
        store_data: Store creation data
        actor: Authenticated actor

    Returns:
        Created store
    """
    return await store_service.create(store_data.model_dump(mode="json"))


@router.get("/", response_model=StorePage)
async def get_stores(
        page: int = Query(1, ge=1),
        limit: Optional[int] = Query(None, ge=1, le=100),
        search: Optional[str] = None,
        actor: Actor = Depends(has_permission("stores:read"))
):
    """
    Get stores with optional search on name, location or code.

    Args:
        page: Page number
        limit: Page size
        search: Search text
        actor: Authenticated actor

    Returns:
        One page of stores with pagination details
    """
    return await store_service.find_all(page, limit, search)


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
        store_id: str,
        actor: Actor = Depends(has_permission("stores:read"))
):
    """
    Get store by ID.

    Raises:
        NotFoundError: If store not found
    """
    return await store_service.find_one(store_id)


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
        store_id: str,
        store_data: StoreUpdate,
        actor: Actor = Depends(has_permission("stores:write"))
):
    return await store_service.update(store_id, store_data.model_dump(exclude_unset=True, mode="json"))


@router.delete("/{store_id}")
async def delete_store(
        store_id: str,
        actor: Actor = Depends(has_permission("stores:delete"))
):
    return await store_service.remove(store_id)
