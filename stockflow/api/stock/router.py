"""
Stock API routes: categories, stock items and stock history.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.stock_categories.service import stock_category_service
from stockflow.domains.stock_history.service import stock_history_service
from stockflow.domains.stock_items.service import stock_item_service
from stockflow.schemas.stock import (StockCategoryCreate, StockCategoryResponse, StockCategoryUpdate,
                                     StockHistoryResponse, StockItemCreate, StockItemResponse, StockItemUpdate)

router = APIRouter()


# Categories

@router.post("/category", response_model=StockCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
        category_data: StockCategoryCreate,
        actor: Actor = Depends(has_permission("stock:write"))
):
    return await stock_category_service.create(category_data.model_dump(mode="json"))


@router.get("/category", response_model=List[StockCategoryResponse])
async def get_categories(actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_category_service.find_all()


@router.get("/category/{category_id}", response_model=StockCategoryResponse)
async def get_category(category_id: str, actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_category_service.find_one(category_id)


@router.put("/category/{category_id}", response_model=StockCategoryResponse)
async def update_category(
        category_id: str,
        category_data: StockCategoryUpdate,
        actor: Actor = Depends(has_permission("stock:write"))
):
    return await stock_category_service.update(category_id, category_data.model_dump(exclude_unset=True, mode="json"))


@router.delete("/category/{category_id}")
async def delete_category(category_id: str, actor: Actor = Depends(has_permission("stock:delete"))):
    return await stock_category_service.remove(category_id)


# Stock items

@router.post("/stockin", response_model=StockItemResponse, status_code=status.HTTP_201_CREATED)
async def create_stock_item(
        stock_data: StockItemCreate,
        actor: Actor = Depends(has_permission("stock:write"))
):
    """
    Create a stock item. The SKU is generated from the product name when omitted.

    Args:
        stock_data: Stock item data
        actor: Authenticated actor

    Returns:
        Created stock item with category and store
    """
    return await stock_item_service.create(stock_data.model_dump(mode="json"))


@router.get("/stockin", response_model=List[StockItemResponse])
async def get_stock_items(actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_item_service.find_all()


@router.get("/stockin/{stock_id}", response_model=StockItemResponse)
async def get_stock_item(stock_id: str, actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_item_service.find_one(stock_id)


@router.put("/stockin/{stock_id}", response_model=StockItemResponse)
async def update_stock_item(
        stock_id: str,
        stock_data: StockItemUpdate,
        actor: Actor = Depends(has_permission("stock:write"))
):
    return await stock_item_service.update(stock_id, stock_data.model_dump(exclude_unset=True, mode="json"))


@router.delete("/stockin/{stock_id}")
async def delete_stock_item(stock_id: str, actor: Actor = Depends(has_permission("stock:delete"))):
    return await stock_item_service.remove(stock_id)


# Stock history

@router.get("/history", response_model=List[StockHistoryResponse])
async def get_stock_history(actor: Actor = Depends(has_permission("stock:read"))):
    """
    Get every stock movement, newest first.
    """
    return await stock_history_service.find_all()


@router.get("/history/stock/{stock_id}", response_model=List[StockHistoryResponse])
async def get_stock_history_by_stock_item(stock_id: str, actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_history_service.find_by_stock_item(stock_id)


@router.get("/history/request/{request_id}", response_model=List[StockHistoryResponse])
async def get_stock_history_by_request(request_id: str, actor: Actor = Depends(has_permission("stock:read"))):
    return await stock_history_service.find_by_request(request_id)


@router.get("/history/movement", response_model=List[StockHistoryResponse])
async def get_stock_history_by_movement(
        movement_type: str = Query(..., alias="type"),
        actor: Actor = Depends(has_permission("stock:read"))
):
    """
    Get stock movements of one type (IN, OUT or ADJUSTMENT).
    """
    return await stock_history_service.find_by_movement_type(movement_type)
