"""
Sales rollups: daily, weekly and monthly totals kept in step with the ledger
"""
from datetime import datetime, timezone
from typing import List, Optional, Type

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.config import LANG
from chaifi.core import periods
from chaifi.core.exceptions import NotFoundError, StorageError
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.money import format_cents
from chaifi.database.models.menu_item import new_id
from chaifi.database.models.summary import (
    DailySummary, MonthlySummary, SummaryMixin, WeeklySummary
)
from chaifi.database.models.transaction import Transaction

logger = get_i18n_logger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

Deltas = tuple[int, int, int, int]  # total_cents, gpay_cents, cash_cents, order_count


class SummaryService:
    """
    Service maintaining the three rollup tables.

    Additions go through a single atomic statement per period row
    (SET total_cents = total_cents + :delta ...), never a read-modify-write,
    so two sales landing on the same day cannot overwrite each other's
    increment.
    """

    @staticmethod
    async def _upsert(db: AsyncSession, model: Type[SummaryMixin], key_values: dict, deltas: Deltas) -> None:
        """Add deltas to the period row, creating it seeded with the deltas if absent"""
        total, gpay, cash, count = deltas
        insert_factory = _UPSERT_INSERTS.get(db.bind.dialect.name)

        if insert_factory is not None:
            stmt = insert_factory(model).values(
                id=new_id(),
                total_cents=total,
                gpay_cents=gpay,
                cash_cents=cash,
                order_count=count,
                created_at=datetime.now(timezone.utc),
                **key_values
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[model.period_field],
                set_={
                    "total_cents": model.total_cents + stmt.excluded.total_cents,
                    "gpay_cents": model.gpay_cents + stmt.excluded.gpay_cents,
                    "cash_cents": model.cash_cents + stmt.excluded.cash_cents,
                    "order_count": model.order_count + stmt.excluded.order_count,
                }
            )
            await db.execute(stmt)
            return

        # Other backends: increment in place, insert when no row matched
        period_key = key_values[model.period_field]
        if await SummaryService._adjust(db, model, period_key, deltas) > 0:
            return
        try:
            async with db.begin_nested():
                db.add(model(
                    total_cents=total,
                    gpay_cents=gpay,
                    cash_cents=cash,
                    order_count=count,
                    **key_values
                ))
        except IntegrityError:
            # Another session created the row first
            await SummaryService._adjust(db, model, period_key, deltas)

    @staticmethod
    async def _adjust(db: AsyncSession, model: Type[SummaryMixin], period_key: str, deltas: Deltas) -> int:
        """Add (possibly negative) deltas to an existing row; returns rows matched"""
        total, gpay, cash, count = deltas
        result = await db.execute(
            update(model)
            .where(getattr(model, model.period_field) == period_key)
            .values(
                total_cents=model.total_cents + total,
                gpay_cents=model.gpay_cents + gpay,
                cash_cents=model.cash_cents + cash,
                order_count=model.order_count + count,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    async def apply_transaction(db: AsyncSession, transaction: Transaction) -> None:
        """
        Roll one recorded sale into its day, week and month.

        Called once per sale, after its stock has been taken and inside the
        same database transaction. Does not commit.
        """
        gpay, cash = transaction.payment_split()
        deltas: Deltas = (transaction.total_cents, gpay, cash, 1)
        day = transaction.date

        await SummaryService._upsert(db, DailySummary, {"date": day}, deltas)
        await SummaryService._upsert(
            db,
            WeeklySummary,
            {"week_start": periods.week_start(day), "week_end": periods.week_end(day)},
            deltas
        )
        await SummaryService._upsert(db, MonthlySummary, {"month": periods.month_key(day)}, deltas)

        logger.debug(
            "summary.applied",
            language=LANG,
            date=day,
            total=transaction.total_amount,
            gpay=format_cents(gpay),
            cash=format_cents(cash)
        )

    # === Reads ===

    @staticmethod
    async def _get(db: AsyncSession, model: Type[SummaryMixin], period_key: str) -> Optional[SummaryMixin]:
        result = await db.execute(
            select(model)
            .where(getattr(model, model.period_field) == period_key)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _list(db: AsyncSession, model: Type[SummaryMixin], limit: Optional[int]) -> List[SummaryMixin]:
        query = (
            select(model)
            .order_by(getattr(model, model.period_field).desc())
            .execution_options(populate_existing=True)
        )
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_daily(db: AsyncSession, day: str) -> Optional[DailySummary]:
        return await SummaryService._get(db, DailySummary, day)

    @staticmethod
    async def get_weekly(db: AsyncSession, week_start: str) -> Optional[WeeklySummary]:
        return await SummaryService._get(db, WeeklySummary, week_start)

    @staticmethod
    async def get_monthly(db: AsyncSession, month: str) -> Optional[MonthlySummary]:
        return await SummaryService._get(db, MonthlySummary, month)

    @staticmethod
    async def require(db: AsyncSession, model: Type[SummaryMixin], period_key: str) -> SummaryMixin:
        """Like the get_* helpers but raises NotFoundError for a missing row"""
        summary = await SummaryService._get(db, model, period_key)
        if summary is None:
            raise NotFoundError(
                f"No summary for {period_key}",
                {model.period_field: period_key}
            )
        return summary

    @staticmethod
    async def list_daily(db: AsyncSession, limit: Optional[int] = None) -> List[DailySummary]:
        """Daily rows, most recent date first"""
        return await SummaryService._list(db, DailySummary, limit)

    @staticmethod
    async def list_weekly(db: AsyncSession, limit: Optional[int] = None) -> List[WeeklySummary]:
        return await SummaryService._list(db, WeeklySummary, limit)

    @staticmethod
    async def list_monthly(db: AsyncSession, limit: Optional[int] = None) -> List[MonthlySummary]:
        return await SummaryService._list(db, MonthlySummary, limit)

    # === Retraction ===

    @staticmethod
    async def _delete_transactions(db: AsyncSession, start: str, end: str) -> int:
        result = await db.execute(
            delete(Transaction)
            .where(Transaction.date >= start, Transaction.date <= end)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    async def retract_day(db: AsyncSession, day: str) -> int:
        """
        Clear one day: its sales, its daily row, and its share of the week and month.

        The daily row's totals are subtracted from the weekly and monthly rows
        as they stand, without clamping at zero. Stock is not given back.

        Returns:
            Number of transactions deleted
        """
        try:
            daily = await SummaryService.get_daily(db, day)
            deleted = await SummaryService._delete_transactions(db, day, day)

            if daily is not None:
                total, gpay, cash, count = daily.totals()
                negated: Deltas = (-total, -gpay, -cash, -count)
                await SummaryService._adjust(db, WeeklySummary, periods.week_start(day), negated)
                await SummaryService._adjust(db, MonthlySummary, periods.month_key(day), negated)

            await db.execute(delete(DailySummary).where(DailySummary.date == day))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("summary.retract_failed", language=LANG, period=day, error=str(e))
            raise StorageError(f"Could not clear data for {day}") from e

        logger.info("summary.day_retracted", language=LANG, date=day, deleted=deleted)
        return deleted

    @staticmethod
    async def retract_week(db: AsyncSession, week_start: str) -> int:
        """
        Clear one week: its sales, its weekly row, and its share of the month.

        The week's totals come off the month of week_start, even when the
        week straddles two months. Daily rows are left as they are.

        Returns:
            Number of transactions deleted
        """
        week_end = periods.week_end(week_start)
        try:
            weekly = await SummaryService.get_weekly(db, week_start)
            deleted = await SummaryService._delete_transactions(db, week_start, week_end)

            if weekly is not None:
                total, gpay, cash, count = weekly.totals()
                await SummaryService._adjust(
                    db, MonthlySummary, periods.month_key(week_start), (-total, -gpay, -cash, -count)
                )

            await db.execute(delete(WeeklySummary).where(WeeklySummary.week_start == week_start))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("summary.retract_failed", language=LANG, period=week_start, error=str(e))
            raise StorageError(f"Could not clear data for week {week_start}") from e

        logger.info("summary.week_retracted", language=LANG, week_start=week_start, week_end=week_end, deleted=deleted)
        return deleted

    @staticmethod
    async def retract_month(db: AsyncSession, month: str) -> int:
        """
        Clear one month: its sales (dates month-01 to month-31 as strings)
        and its monthly row. Daily and weekly rows are left as they are.

        Returns:
            Number of transactions deleted
        """
        start, end = periods.month_bounds(month)
        try:
            deleted = await SummaryService._delete_transactions(db, start, end)
            await db.execute(delete(MonthlySummary).where(MonthlySummary.month == month))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("summary.retract_failed", language=LANG, period=month, error=str(e))
            raise StorageError(f"Could not clear data for {month}") from e

        logger.info("summary.month_retracted", language=LANG, month=month, deleted=deleted)
        return deleted
