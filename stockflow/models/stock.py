# stockflow/models/stock.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from stockflow.models.actor import Actor


class Unit(str, Enum):
    PCS = "PCS"
    KG = "KG"
    LITERS = "LITERS"
    METER = "METER"
    BOX = "BOX"
    PACK = "PACK"
    OTHER = "OTHER"


class MovementType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"


class SourceType(str, Enum):
    ISSUE = "ISSUE"
    RECEIPT = "RECEIPT"


class StockCategoryModel(BaseModel):
    """Database model for stock categories"""
    name: str
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class StockItemModel(BaseModel):
    """Database model for stock items (stock-in records)"""
    product_name: str
    sku: str
    quantity: float = 0
    unit: Unit
    unit_price: float = 0
    reorder_level: Optional[float] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    category_id: str
    store_id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "example": {
                "product_name": "Fish Feed Pellets",
                "sku": "FFP3a9c",
                "quantity": 120,
                "unit": "KG",
                "unit_price": 2.5,
                "reorder_level": 20,
                "category_id": "60d21b4967d0d8992e610c70",
                "store_id": "60d21b4967d0d8992e610c71"
            }
        }
    }


class StockHistoryModel(BaseModel):
    """Database model for a single stock movement"""
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
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "use_enum_values": True,
    }
