"""
Stock adjustment: validating and decrementing stock for sales, manual stock
edits and the stock reset
"""
from typing import Iterable, List, Mapping

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.config import LANG
from chaifi.core.exceptions import InsufficientStockError, NotFoundError
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.database.models.menu_item import MenuItem, ResetScope

logger = get_i18n_logger(__name__)


class StockService:
    """
    Service for everything that moves stock_quantity.

    Nothing here commits except the manual operations (set_stock,
    reset_stock). reserve_stock runs inside the caller's transaction so a
    sale's stock, ledger row and rollups are committed or discarded together.
    """

    @staticmethod
    async def get_item(db: AsyncSession, item_id: str) -> MenuItem:
        """
        Get a menu item by ID

        Raises:
            NotFoundError: If no item has this ID
        """
        result = await db.execute(
            select(MenuItem)
            .where(MenuItem.id == item_id)
            .execution_options(populate_existing=True)
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise NotFoundError(f"Menu item {item_id} not found", {"item_id": item_id})
        return item

    @staticmethod
    def _requested_quantities(lines: Iterable[Mapping]) -> dict[str, int]:
        """Sum quantities per item, keeping first-seen order"""
        requested: dict[str, int] = {}
        for line in lines:
            requested[line["id"]] = requested.get(line["id"], 0) + int(line["quantity"])
        return requested

    @staticmethod
    async def reserve_stock(db: AsyncSession, lines: Iterable[Mapping]) -> dict[str, MenuItem]:
        """
        Validate then decrement stock for every line of a sale.

        Process:
        1. Resolve every line's item and check the summed quantity against
           current stock, in line order. Nothing is written until every line
           passes.
        2. Decrement each item with a conditional UPDATE (stock >= quantity)
           and set available = new stock > 0.

        If another session sold the same stock between steps 1 and 2 the
        conditional UPDATE matches no row and InsufficientStockError is
        raised; the caller rolls back, so earlier decrements vanish too.

        Args:
            db: Session owning the sale's transaction (not committed here)
            lines: Dicts with "id" (menu item id) and "quantity"

        Returns:
            Mapping of item id to the refreshed MenuItem

        Raises:
            NotFoundError: A line references an unknown item
            InsufficientStockError: A line asks for more than is in stock
        """
        requested = StockService._requested_quantities(lines)

        result = await db.execute(
            select(MenuItem)
            .where(MenuItem.id.in_(list(requested)))
            .execution_options(populate_existing=True)
        )
        items = {item.id: item for item in result.scalars().all()}

        # Validation pass
        for item_id, quantity in requested.items():
            item = items.get(item_id)
            if item is None:
                logger.warning("sale.item_not_found", language=LANG, item_id=item_id)
                raise NotFoundError(f"Menu item {item_id} not found", {"item_id": item_id})
            if not item.can_fulfill(quantity):
                logger.warning(
                    "item.insufficient_stock",
                    language=LANG,
                    item_name=item.name,
                    available=item.stock_quantity or 0,
                    requested=quantity
                )
                raise InsufficientStockError(item.name, item.stock_quantity or 0, quantity)

        # Mutation pass
        for item_id, quantity in requested.items():
            outcome = await db.execute(
                update(MenuItem)
                .where(MenuItem.id == item_id, MenuItem.stock_quantity >= quantity)
                .values(
                    stock_quantity=MenuItem.stock_quantity - quantity,
                    available=MenuItem.stock_quantity > quantity
                )
                .execution_options(synchronize_session=False)
            )
            item = items[item_id]
            await db.refresh(item, ["stock_quantity", "available"])
            if outcome.rowcount == 0:
                raise InsufficientStockError(item.name, item.stock_quantity or 0, quantity)

            logger.debug(
                "item.stock_deducted",
                language=LANG,
                item_name=item.name,
                quantity=quantity,
                new_stock=item.stock_quantity
            )
            if item.stock_quantity == 0:
                logger.warning("inventory.out_of_stock", language=LANG, item_name=item.name)

        return items

    @staticmethod
    async def set_stock(db: AsyncSession, item_id: str, stock_quantity: int) -> MenuItem:
        """Set an item's stock from the stock screen"""
        item = await StockService.get_item(db, item_id)
        item.set_stock(stock_quantity)
        await db.commit()
        return item

    @staticmethod
    async def reset_stock(db: AsyncSession, scope: ResetScope = ResetScope.ALL) -> List[MenuItem]:
        """
        Reset stock for a new counter session.

        Every item gets stock_quantity = 0 and available = True, for both
        scopes. Stock is zeroed, not restored to DEFAULT_STOCK_QUANTITY.

        Returns:
            Every menu item after the reset
        """
        await db.execute(
            update(MenuItem)
            .values(stock_quantity=0, available=True)
            .execution_options(synchronize_session=False)
        )
        await db.commit()

        result = await db.execute(
            select(MenuItem)
            .order_by(MenuItem.category, MenuItem.name)
            .execution_options(populate_existing=True)
        )
        items = list(result.scalars().all())

        logger.info("stock.reset", language=LANG, scope=scope.value, count=len(items))
        return items
