"""
Stock category, stock item and stock history schema models.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from stockflow.models.actor import Actor
from stockflow.models.stock import MovementType, SourceType, Unit
from stockflow.schemas.base import ApiModel


class StockCategoryCreate(ApiModel):
    name: str
    description: Optional[str] = None


class StockCategoryUpdate(ApiModel):
    name: Optional[str] = None
    description: Optional[str] = None


class StockCategoryResponse(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "populate_by_name": True,
    }


class StockItemCreate(ApiModel):
    """Schema for creating stock items. The SKU is generated when omitted."""
    product_name: str
    sku: Optional[str] = None
    quantity: float = 0
    unit: Unit
    unit_price: float = 0
    reorder_level: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    category_id: str
    store_id: str


class StockItemUpdate(ApiModel):
    product_name: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[Unit] = None
    unit_price: Optional[float] = None
    reorder_level: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    store_id: Optional[str] = None


class StockItemResponse(BaseModel):
    """Schema for stock item responses, with category and store embedded."""
    id: str = Field(..., alias="_id")
    product_name: str
    sku: str
    quantity: float
    unit: Unit
    unit_price: float
    reorder_level: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    category_id: str
    store_id: str
    created_at: datetime
    updated_at: datetime
    category: Optional[Dict[str, Any]] = None
    store: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }


class StockHistoryResponse(BaseModel):
    id: str = Field(..., alias="_id")
    stock_in_id: str
    movement_type: MovementType
    source_type: SourceType
    source_id: str
    qty_before: float
    qty_change: float
    qty_after: float
    unit_price: Optional[float] = None
    notes: Optional[str] = None
    created_by: Actor
    created_at: datetime
    stock_in: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
    }
