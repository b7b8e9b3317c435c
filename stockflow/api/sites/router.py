"""
Site API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.sites.service import site_service
from stockflow.schemas.site import SiteCreate, SiteResponse, SiteUpdate

router = APIRouter()


@router.post("/", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_site(site_data: SiteCreate, actor: Actor = Depends(has_permission("sites:write"))):
    return await site_service.create(site_data.model_dump(mode="json"))


@router.get("/", response_model=List[SiteResponse])
async def get_sites(actor: Actor = Depends(has_permission("sites:read"))):
    return await site_service.find_all()


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site_id: str, actor: Actor = Depends(has_permission("sites:read"))):
    return await site_service.find_one(site_id)


@router.put("/{site_id}", response_model=SiteResponse)
async def update_site(site_id: str, site_data: SiteUpdate, actor: Actor = Depends(has_permission("sites:write"))):
    return await site_service.update(site_id, site_data.model_dump(exclude_unset=True, mode="json"))


@router.delete("/{site_id}")
async def delete_site(site_id: str, actor: Actor = Depends(has_permission("sites:delete"))):
    return await site_service.remove(site_id)
