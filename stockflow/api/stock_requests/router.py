"""
Stock request API routes for the requisition lifecycle.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.stock_requests.service import stock_request_service
from stockflow.schemas.stock_request import (CommentCreate, DeletedEnvelope, IssueEnvelope, IssueMaterials,
                                             ReceiveEnvelope, ReceiveMaterials, StockRequestApprove,
                                             StockRequestCreate, StockRequestEnvelope, StockRequestPageEnvelope,
                                             StockRequestReject)

router = APIRouter()


def envelope(data, message: Optional[str] = None) -> dict:
    return {"success": True, "data": data, "message": message}


@router.post("/", response_model=StockRequestEnvelope, status_code=status.HTTP_201_CREATED)
async def create_request(
        request_data: StockRequestCreate,
        actor: Actor = Depends(has_permission("stock_requests:write"))
):
    """
    Create a new stock request for a site.

    Args:
        request_data: Site, notes and requested items
        actor: Authenticated requester

    Returns:
        Created request
    """
    request = await stock_request_service.create(
        site_id=request_data.site_id,
        requester=actor,
        items=[item.model_dump() for item in request_data.items],
        notes=request_data.notes
    )
    return envelope(request, "Stock request created successfully")


@router.get("/", response_model=StockRequestPageEnvelope)
async def get_requests(
        page: int = Query(1, ge=1),
        limit: Optional[int] = Query(None, ge=1, le=100),
        site_id: Optional[str] = Query(None, alias="siteId"),
        request_status: Optional[str] = Query(None, alias="status"),
        actor: Actor = Depends(has_permission("stock_requests:read"))
):
    """
    Get stock requests, newest first, with pagination.
    """
    result = await stock_request_service.find_all(page, limit, site_id, request_status)
    return envelope(result)


@router.get("/issuable", response_model=StockRequestPageEnvelope)
async def get_issuable_requests(
        page: int = Query(1, ge=1),
        limit: Optional[int] = Query(None, ge=1, le=100),
        site_id: Optional[str] = Query(None, alias="siteId"),
        actor: Actor = Depends(has_permission("stock_requests:read"))
):
    """
    Get approved or partially issued requests with items still to issue, oldest first.
    """
    result = await stock_request_service.find_issuable(page, limit, site_id)
    return envelope(result)


@router.post("/issue-materials", response_model=IssueEnvelope)
async def issue_materials(
        issue_data: IssueMaterials,
        actor: Actor = Depends(has_permission("stock_requests:issue"))
):
    """
    Issue approved quantities out of stock.
    """
    result = await stock_request_service.issue_materials(
        issue_data.request_id,
        actor,
        [line.model_dump() for line in issue_data.items]
    )
    return envelope(result, "Materials issued successfully")


@router.post("/receive-materials", response_model=ReceiveEnvelope)
async def receive_materials(
        receive_data: ReceiveMaterials,
        actor: Actor = Depends(has_permission("stock_requests:receive"))
):
    """
    Confirm receipt of issued quantities.
    """
    result = await stock_request_service.receive_materials(
        receive_data.request_id,
        actor,
        [line.model_dump() for line in receive_data.items]
    )
    return envelope(result, "Materials received successfully")


@router.get("/{request_id}", response_model=StockRequestEnvelope)
async def get_request(
        request_id: str,
        actor: Actor = Depends(has_permission("stock_requests:read"))
):
    """
    Get stock request by ID.

    Raises:
        NotFoundError: If the request does not exist
    """
    return envelope(await stock_request_service.find_one(request_id))


@router.patch("/{request_id}/approve", response_model=StockRequestEnvelope)
async def approve_request(
        request_id: str,
        approve_data: StockRequestApprove,
        actor: Actor = Depends(has_permission("stock_requests:approve"))
):
    """
    Approve a pending request, optionally modifying, adding or removing items.
    """
    request = await stock_request_service.approve(
        request_id,
        actor,
        item_modifications=[mod.model_dump(exclude_none=True) for mod in approve_data.item_modifications],
        items_to_add=[item.model_dump() for item in approve_data.items_to_add],
        items_to_remove=approve_data.items_to_remove,
        comment=approve_data.comment
    )
    return envelope(request, "Stock request approved successfully")


@router.patch("/{request_id}/modify-approve", response_model=StockRequestEnvelope)
async def modify_approve_request(
        request_id: str,
        approve_data: StockRequestApprove,
        actor: Actor = Depends(has_permission("stock_requests:approve"))
):
    """
    Modify a pending or approved request and (re)approve it.
    """
    request = await stock_request_service.modify_approve(
        request_id,
        actor,
        item_modifications=[mod.model_dump(exclude_none=True) for mod in approve_data.item_modifications],
        items_to_add=[item.model_dump() for item in approve_data.items_to_add],
        items_to_remove=approve_data.items_to_remove,
        comment=approve_data.comment
    )
    return envelope(request, "Stock request modified and approved successfully")


@router.patch("/{request_id}/reject", response_model=StockRequestEnvelope)
async def reject_request(
        request_id: str,
        reject_data: Optional[StockRequestReject] = None,
        actor: Actor = Depends(has_permission("stock_requests:approve"))
):
    reason = reject_data.notes if reject_data else None
    request = await stock_request_service.reject(request_id, actor, reason)
    return envelope(request, "Stock request rejected")


@router.patch("/{request_id}/close", response_model=StockRequestEnvelope)
async def close_request(
        request_id: str,
        actor: Actor = Depends(has_permission("stock_requests:approve"))
):
    request = await stock_request_service.close(request_id, actor)
    return envelope(request, "Stock request closed")


@router.post("/{request_id}/comments", response_model=StockRequestEnvelope, status_code=status.HTTP_201_CREATED)
async def add_comment(
        request_id: str,
        comment_data: CommentCreate,
        actor: Actor = Depends(has_permission("stock_requests:write"))
):
    request = await stock_request_service.add_comment(request_id, actor, comment_data.description)
    return envelope(request, "Comment added successfully")


@router.delete("/{request_id}", response_model=DeletedEnvelope)
async def delete_request(
        request_id: str,
        actor: Actor = Depends(has_permission("stock_requests:delete"))
):
    """
    Delete a stock request that has not been issued against.
    """
    result = await stock_request_service.delete(request_id)
    return envelope(result, "Stock request deleted successfully")
