"""
MenuItem Pydantic schemas for API requests/responses
Prices travel as 2-decimal strings ("25.00"); the database holds cents
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from chaifi.database.models.menu_item import ResetScope, StockStatus
from chaifi.schemas.base import CamelModel


# === MenuItem Schemas ===

class MenuItemBase(CamelModel):
    """Base schema for menu items"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Price per serving, e.g. 25.00")
    category: str = Field(..., min_length=1, max_length=50, description="Tea, Coffee, Snacks, ...")
    image: Optional[str] = Field(None, max_length=500)


class MenuItemCreate(MenuItemBase):
    """Schema for adding an item to the menu"""
    available: bool = True
    stock_quantity: Optional[int] = Field(None, ge=0, description="Defaults to DEFAULT_STOCK_QUANTITY")


class MenuItemUpdate(CamelModel):
    """Partial update; only fields present in the body are changed"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    image: Optional[str] = Field(None, max_length=500)
    available: Optional[bool] = None


class MenuItemResponse(CamelModel):
    """Response schema for menu item"""
    id: str
    name: str
    description: Optional[str] = None
    price: str
    category: str
    image: Optional[str] = None
    available: bool
    stock_quantity: int = 0
    stock_status: StockStatus

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def missing_stock_is_zero(cls, v: Optional[int]) -> int:
        return v or 0


# === Stock Schemas ===

class StockUpdate(CamelModel):
    """Body of PUT /stock/{id}"""
    stock_quantity: int = Field(..., ge=0)


class StockReset(CamelModel):
    """Body of POST /stock/reset"""
    reset_type: ResetScope = ResetScope.ALL


class StockResetResponse(CamelModel):
    message: str
    reset_type: ResetScope
    items: list[MenuItemResponse]


# === Sales Schemas ===

class ItemSales(BaseModel):
    """Servings sold of one item on one day; snake_case keys as the stock screen reads them"""
    item_id: str
    name: str
    quantity: int
    total_price: str
