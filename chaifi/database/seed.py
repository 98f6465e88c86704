"""
Default data created on first start, and the stock migration for older databases
"""
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.config import (
    DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD,
    DEFAULT_STAFF_USERNAME, DEFAULT_STAFF_PASSWORD,
    DEFAULT_STOCK_QUANTITY, LANG
)
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.money import to_cents
from chaifi.core.security import get_password_hash
from chaifi.database.models.menu_item import MenuItem
from chaifi.database.models.user import User, UserRole

logger = get_i18n_logger(__name__)

DEFAULT_MENU_IMAGE = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=250"

# (name, description, price, category, unsplash photo id)
DEFAULT_MENU = [
    ("Masala Chai", "Traditional spiced tea", "25.00", "Tea", "1571934811356-5cc061b6821f"),
    ("Green Tea", "Healthy herbal tea", "30.00", "Tea", "1556909114-f6e7ad7d3136"),
    ("Cappuccino", "Rich coffee with foam", "80.00", "Coffee", "1509042239860-f550ce710b93"),
    ("Black Coffee", "Strong black coffee", "50.00", "Coffee", "1447933601403-0c6688de566e"),
    ("Samosa", "Crispy fried snack", "20.00", "Snacks", "1601050690597-df0568f70950"),
    ("Veg Sandwich", "Fresh vegetable sandwich", "60.00", "Snacks", "1509722747041-616f39b57569"),
    ("Orange Juice", "Fresh squeezed orange", "40.00", "Beverages", "1621506289937-a8e4df240d0b"),
    ("Mango Lassi", "Sweet yogurt drink", "45.00", "Beverages", "1571091718767-18b5b1457add"),
]


async def seed_users(db: AsyncSession) -> None:
    """Create the admin and counter accounts if their usernames are free"""
    accounts = [
        (DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD, UserRole.ADMIN),
        (DEFAULT_STAFF_USERNAME, DEFAULT_STAFF_PASSWORD, UserRole.STAFF),
    ]
    for username, password, role in accounts:
        result = await db.execute(select(User).where(User.username == username))
        if result.scalar_one_or_none() is not None:
            continue
        db.add(User(username=username, hashed_password=get_password_hash(password), role=role))
        logger.info("seed.user_created", language=LANG, username=username, role=role.value)
    await db.commit()


async def seed_menu(db: AsyncSession) -> bool:
    """Insert the default menu into an empty catalog; returns True if it did"""
    count = await db.scalar(select(func.count()).select_from(MenuItem))
    if count:
        return False

    for name, description, price, category, photo in DEFAULT_MENU:
        db.add(MenuItem(
            name=name,
            description=description,
            price_cents=to_cents(price),
            category=category,
            image=DEFAULT_MENU_IMAGE.format(photo),
            available=True,
            stock_quantity=DEFAULT_STOCK_QUANTITY,
        ))
    await db.commit()
    logger.info("seed.menu_created", language=LANG, count=len(DEFAULT_MENU))
    return True


async def migrate_stock_quantity(db: AsyncSession) -> int:
    """
    Give items created before stock tracking a stock_quantity.

    NULL stock becomes DEFAULT_STOCK_QUANTITY and available is recomputed
    from it. Failure is logged and skipped so startup goes on.
    """
    try:
        result = await db.execute(
            update(MenuItem)
            .where(MenuItem.stock_quantity.is_(None))
            .values(stock_quantity=DEFAULT_STOCK_QUANTITY, available=DEFAULT_STOCK_QUANTITY > 0)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("seed.migration_failed", language=LANG, error=str(e))
        return 0

    if result.rowcount:
        logger.info("seed.stock_migrated", language=LANG, count=result.rowcount)
    return result.rowcount


async def initialize_default_data(db: AsyncSession) -> None:
    """Seed users, then either the default menu or the stock migration"""
    await seed_users(db)
    if not await seed_menu(db):
        await migrate_stock_quantity(db)
