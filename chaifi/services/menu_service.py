"""
Menu catalog: listing, creating and editing menu items, and per-item sales
"""
from collections import defaultdict
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.config import DEFAULT_STOCK_QUANTITY, LANG
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.money import format_cents, to_cents
from chaifi.database.models.menu_item import MenuItem
from chaifi.database.models.transaction import Transaction
from chaifi.schemas.menu_item import MenuItemCreate, MenuItemUpdate
from chaifi.services.stock_service import StockService

logger = get_i18n_logger(__name__)


class MenuService:
    """Service for the menu catalog. Items are never deleted, only made unavailable."""

    @staticmethod
    async def list_items(db: AsyncSession, search: Optional[str] = None) -> List[MenuItem]:
        """
        All menu items, grouped by category then name.

        search matches name or category, case-insensitively.
        """
        query = select(MenuItem).execution_options(populate_existing=True)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(or_(
                func.lower(MenuItem.name).like(pattern),
                func.lower(MenuItem.category).like(pattern),
            ))
        result = await db.execute(query.order_by(MenuItem.category, MenuItem.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_item(db: AsyncSession, item_id: str) -> MenuItem:
        return await StockService.get_item(db, item_id)

    @staticmethod
    async def create_item(db: AsyncSession, data: MenuItemCreate) -> MenuItem:
        stock = data.stock_quantity if data.stock_quantity is not None else DEFAULT_STOCK_QUANTITY
        item = MenuItem(
            name=data.name,
            description=data.description,
            price_cents=to_cents(data.price),
            category=data.category,
            image=data.image,
            available=data.available,
            stock_quantity=stock,
        )
        db.add(item)
        await db.commit()

        logger.info("item.created", language=LANG, item_name=item.name, category=item.category, price=item.price)
        return item

    @staticmethod
    async def update_item(db: AsyncSession, item_id: str, data: MenuItemUpdate) -> MenuItem:
        """Apply only the fields present in the request body"""
        item = await StockService.get_item(db, item_id)
        changes = data.model_dump(exclude_unset=True)

        if "price" in changes:
            price = changes.pop("price")
            if price is not None:
                item.price_cents = to_cents(price)
        for field, value in changes.items():
            if value is None and field in ("name", "category", "available"):
                continue
            setattr(item, field, value)

        await db.commit()
        logger.info("item.updated", language=LANG, item_name=item.name, fields=", ".join(data.model_fields_set))
        return item

    @staticmethod
    async def item_sales(db: AsyncSession, day: str) -> List[dict]:
        """
        Servings sold and revenue per item on one day, from the ledger.

        Line prices are the ones snapshotted at sale time. Items sold but since
        removed from the catalog keep the name stored on the line.
        """
        result = await db.execute(select(Transaction).where(Transaction.date == day))

        quantities: dict[str, int] = defaultdict(int)
        revenue: dict[str, int] = defaultdict(int)
        names: dict[str, str] = {}
        for transaction in result.scalars().all():
            for line in transaction.items or []:
                item_id = line.get("id")
                quantity = int(line.get("quantity") or 0)
                quantities[item_id] += quantity
                revenue[item_id] += to_cents(line.get("price")) * quantity
                names.setdefault(item_id, line.get("name") or item_id)

        return [
            {
                "item_id": item_id,
                "name": names[item_id],
                "quantity": quantity,
                "total_price": format_cents(revenue[item_id]),
            }
            for item_id, quantity in quantities.items()
        ]
