"""
MenuItem database model with i18n logging integration
"""
import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import validates

from chaifi.config import DEFAULT_STOCK_QUANTITY, LOW_STOCK_THRESHOLD, LANG
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.money import format_cents
from chaifi.database.base import Base

logger = get_i18n_logger("menu_item_model")


def new_id() -> str:
    return uuid.uuid4().hex


class StockStatus(StrEnum):
    """Badge shown next to an item on the stock screen"""
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


class ResetScope(StrEnum):
    """Scope of a stock reset; both currently reset every item"""
    TODAY = "today"
    ALL = "all"


class MenuItem(Base):
    """
    Something the counter sells: "Masala Chai", "Samosa", "Mango Lassi".

    stock_quantity is the number of servings left. It is decremented by every
    recorded sale and set by hand from the stock screen. available normally
    mirrors stock_quantity > 0, but a stock reset leaves items available with
    zero stock, so callers must not assume the two always agree.
    """
    __tablename__ = "menu_items"

    # === Core Identity ===
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # === Pricing ===
    price_cents = Column(Integer, nullable=False, default=0)

    # === Menu Organization ===
    category = Column(String(50), nullable=False, index=True)  # "Tea", "Coffee", "Snacks", ...
    image = Column(String(500), nullable=True)

    # === Stock Management ===
    available = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=True, default=DEFAULT_STOCK_QUANTITY)  # NULL only on pre-stock rows

    # === Metadata ===
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # === Helper Methods ===

    @property
    def price(self) -> str:
        return format_cents(self.price_cents or 0)

    @property
    def stock_status(self) -> StockStatus:
        stock = self.stock_quantity or 0
        if stock <= 0:
            return StockStatus.OUT_OF_STOCK
        if stock <= LOW_STOCK_THRESHOLD:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def can_fulfill(self, quantity: int) -> bool:
        """Check whether the requested servings are in stock"""
        return (self.stock_quantity or 0) >= quantity

    def set_stock(self, quantity: int) -> None:
        """Set stock and derive availability from it"""
        old_stock = self.stock_quantity
        self.stock_quantity = quantity
        self.available = quantity > 0

        if old_stock != quantity:
            logger.info(
                "item.stock_updated",
                language=LANG,
                item_name=self.name,
                old_stock=old_stock,
                new_stock=quantity
            )
        if quantity == 0:
            logger.warning("inventory.out_of_stock", language=LANG, item_name=self.name)

    @validates('price_cents')
    def validate_price(self, key, value):
        """Ensure price is positive"""
        if value is not None and value < 0:
            logger.error(
                "error.validation",
                language=LANG,
                field="price",
                message=f"Price cannot be negative, got {value}"
            )
            raise ValueError("Price cannot be negative")
        return value

    @validates('stock_quantity')
    def validate_stock(self, key, value: Optional[int]):
        """Ensure stock is non-negative"""
        if value is not None and value < 0:
            logger.error(
                "error.validation",
                language=LANG,
                field="stock_quantity",
                message=f"Stock cannot be negative, got {value}"
            )
            raise ValueError("Stock cannot be negative")
        return value

    def __repr__(self):
        availability = "Available" if self.available else "Unavailable"
        return f"<MenuItem {self.name} ({self.category}) - {self.price} - {self.stock_quantity} left - {availability}>"
