"""
Summary Aggregator tests
"""
import pytest

from chaifi.database.models.summary import DailySummary
from chaifi.database.models.transaction import PaymentMethod, Transaction
from chaifi.services.summary_service import SummaryService


def sale(day, cents, method=PaymentMethod.CASH, split=None):
    return Transaction(
        date=day,
        items=[{"id": "x", "name": "Tea", "price": "10.00", "quantity": 1}],
        total_cents=cents,
        payment_method=method,
        split_payment=split,
        biller_name="Sriram",
    )


async def record(db, transaction):
    db.add(transaction)
    await db.flush()
    await SummaryService.apply_transaction(db, transaction)
    await db.commit()


def snapshot(summary):
    return summary.totals() if summary else None


@pytest.mark.asyncio
async def test_n_sales_on_one_day_sum_up(db):
    amounts = [3000, 1250, 4599, 1]
    for cents in amounts:
        await record(db, sale("2025-01-08", cents))

    daily = await SummaryService.get_daily(db, "2025-01-08")
    assert daily.total_cents == sum(amounts)
    assert daily.cash_cents == sum(amounts)
    assert daily.gpay_cents == 0
    assert daily.order_count == len(amounts)
    assert daily.total_amount == "88.50"


@pytest.mark.asyncio
async def test_sale_reaches_week_and_month(db):
    await record(db, sale("2025-01-12", 2000, PaymentMethod.GPAY))  # Sunday

    weekly = await SummaryService.get_weekly(db, "2025-01-06")
    assert weekly.week_end == "2025-01-12"
    assert weekly.gpay_cents == 2000

    monthly = await SummaryService.get_monthly(db, "2025-01")
    assert monthly.total_cents == 2000
    assert monthly.order_count == 1


@pytest.mark.asyncio
async def test_split_payment_is_divided(db):
    await record(db, sale("2025-01-08", 2000, PaymentMethod.SPLIT, {"gpayAmount": "12.00", "cashAmount": "8.00"}))

    daily = await SummaryService.get_daily(db, "2025-01-08")
    assert daily.gpay_amount == "12.00"
    assert daily.cash_amount == "8.00"
    assert daily.total_amount == "20.00"


@pytest.mark.asyncio
async def test_split_without_payload_counts_total_only(db):
    await record(db, sale("2025-01-08", 2000, PaymentMethod.SPLIT))

    daily = await SummaryService.get_daily(db, "2025-01-08")
    assert daily.totals() == (2000, 0, 0, 1)


@pytest.mark.asyncio
async def test_retract_day_then_replay_reproduces_rollups(db):
    await record(db, sale("2025-01-07", 1500, PaymentMethod.GPAY))
    days_sales = [
        ("2025-01-08", 3000, PaymentMethod.CASH, None),
        ("2025-01-08", 2000, PaymentMethod.SPLIT, {"gpayAmount": "12.50", "cashAmount": "7.50"}),
    ]
    for day, cents, method, split in days_sales:
        await record(db, sale(day, cents, method, split))

    before = (
        snapshot(await SummaryService.get_daily(db, "2025-01-08")),
        snapshot(await SummaryService.get_weekly(db, "2025-01-06")),
        snapshot(await SummaryService.get_monthly(db, "2025-01")),
    )

    deleted = await SummaryService.retract_day(db, "2025-01-08")
    assert deleted == 2
    assert await SummaryService.get_daily(db, "2025-01-08") is None
    assert (await SummaryService.get_weekly(db, "2025-01-06")).totals() == (1500, 1500, 0, 1)
    assert (await SummaryService.get_monthly(db, "2025-01")).totals() == (1500, 1500, 0, 1)

    for day, cents, method, split in days_sales:
        await record(db, sale(day, cents, method, split))

    after = (
        snapshot(await SummaryService.get_daily(db, "2025-01-08")),
        snapshot(await SummaryService.get_weekly(db, "2025-01-06")),
        snapshot(await SummaryService.get_monthly(db, "2025-01")),
    )
    assert after == before


@pytest.mark.asyncio
async def test_retract_week_leaves_daily_rows(db):
    await record(db, sale("2025-01-08", 1000))
    await record(db, sale("2025-01-15", 500))

    deleted = await SummaryService.retract_week(db, "2025-01-06")

    assert deleted == 1
    assert await SummaryService.get_weekly(db, "2025-01-06") is None
    assert await SummaryService.get_daily(db, "2025-01-08") is not None
    assert (await SummaryService.get_monthly(db, "2025-01")).totals() == (500, 0, 500, 1)


@pytest.mark.asyncio
async def test_retract_month_keeps_daily_and_weekly(db):
    await record(db, sale("2025-02-03", 1000))
    await record(db, sale("2025-03-01", 700))

    deleted = await SummaryService.retract_month(db, "2025-02")

    assert deleted == 1
    assert await SummaryService.get_monthly(db, "2025-02") is None
    assert await SummaryService.get_monthly(db, "2025-03") is not None
    assert await SummaryService.get_daily(db, "2025-02-03") is not None
    assert await SummaryService.get_weekly(db, "2025-02-03") is not None


@pytest.mark.asyncio
async def test_retract_can_drive_totals_negative(db):
    await record(db, sale("2025-01-08", 1000))
    # Daily row now holds more than its week
    await SummaryService._adjust(db, DailySummary, "2025-01-08", (500, 0, 500, 0))
    await db.commit()

    await SummaryService.retract_day(db, "2025-01-08")

    weekly = await SummaryService.get_weekly(db, "2025-01-06")
    assert weekly.total_cents == -500
    assert weekly.order_count == 0


@pytest.mark.asyncio
async def test_lists_are_most_recent_first(db):
    for day in ("2025-01-08", "2025-01-10", "2025-01-09"):
        await record(db, sale(day, 100))

    daily = await SummaryService.list_daily(db)
    assert [d.date for d in daily] == ["2025-01-10", "2025-01-09", "2025-01-08"]
    assert len(await SummaryService.list_daily(db, limit=2)) == 2
