"""
Stock Adjuster tests
"""
import pytest
from sqlalchemy import select

from chaifi.core.exceptions import InsufficientStockError, NotFoundError
from chaifi.database.models.menu_item import MenuItem, ResetScope, StockStatus
from chaifi.services.stock_service import StockService


async def stock_of(db, item_id):
    result = await db.execute(
        select(MenuItem).where(MenuItem.id == item_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_reserve_decrements_by_requested_quantity(db, tea):
    await StockService.reserve_stock(db, [{"id": tea.id, "quantity": 3}])
    await db.commit()

    item = await stock_of(db, tea.id)
    assert item.stock_quantity == 7
    assert item.available is True


@pytest.mark.asyncio
async def test_selling_the_last_serving_makes_item_unavailable(db, samosa):
    await StockService.reserve_stock(db, [{"id": samosa.id, "quantity": 5}])
    await db.commit()

    item = await stock_of(db, samosa.id)
    assert item.stock_quantity == 0
    assert item.available is False
    assert item.stock_status == StockStatus.OUT_OF_STOCK


@pytest.mark.asyncio
async def test_partial_sale_keeps_item_available(db, tea):
    await StockService.reserve_stock(db, [{"id": tea.id, "quantity": 9}])
    await db.commit()

    item = await stock_of(db, tea.id)
    assert item.stock_quantity == 1
    assert item.available is True


@pytest.mark.asyncio
async def test_repeated_lines_for_one_item_are_summed(db, samosa):
    with pytest.raises(InsufficientStockError) as exc_info:
        await StockService.reserve_stock(db, [
            {"id": samosa.id, "quantity": 3},
            {"id": samosa.id, "quantity": 3},
        ])
    assert exc_info.value.available == 5
    assert exc_info.value.requested == 6


@pytest.mark.asyncio
async def test_insufficient_stock_error_message(db, tea):
    with pytest.raises(InsufficientStockError) as exc_info:
        await StockService.reserve_stock(db, [{"id": tea.id, "quantity": 11}])
    assert exc_info.value.message == "Insufficient stock for Tea. Available: 10, Requested: 11"
    assert exc_info.value.item_name == "Tea"


@pytest.mark.asyncio
async def test_one_short_line_leaves_every_item_untouched(db, tea, samosa):
    # Rollback expires the fixtures, so keep plain ids
    tea_id, samosa_id = tea.id, samosa.id
    with pytest.raises(InsufficientStockError):
        await StockService.reserve_stock(db, [
            {"id": tea_id, "quantity": 2},
            {"id": samosa_id, "quantity": 9},
        ])
    await db.rollback()

    assert (await stock_of(db, tea_id)).stock_quantity == 10
    assert (await stock_of(db, samosa_id)).stock_quantity == 5


@pytest.mark.asyncio
async def test_unknown_item_is_not_found(db, tea):
    with pytest.raises(NotFoundError):
        await StockService.reserve_stock(db, [{"id": "missing", "quantity": 1}])


@pytest.mark.asyncio
async def test_set_stock_updates_availability(db, tea):
    item = await StockService.set_stock(db, tea.id, 0)
    assert item.available is False

    item = await StockService.set_stock(db, tea.id, 8)
    assert item.stock_quantity == 8
    assert item.available is True
    assert item.stock_status == StockStatus.LOW_STOCK


@pytest.mark.asyncio
async def test_set_stock_rejects_negative(db, tea):
    with pytest.raises(ValueError):
        await StockService.set_stock(db, tea.id, -1)


@pytest.mark.asyncio
@pytest.mark.parametrize("scope", [ResetScope.TODAY, ResetScope.ALL])
async def test_reset_zeroes_stock_and_keeps_items_available(db, tea, samosa, scope):
    await StockService.set_stock(db, samosa.id, 0)

    items = await StockService.reset_stock(db, scope)

    assert [item.name for item in items] == ["Samosa", "Tea"]  # Snacks before Tea
    for item in items:
        assert item.stock_quantity == 0
        assert item.available is True
