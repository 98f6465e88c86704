"""
Transaction ledger: recording sales and reading or bulk-deleting them
"""
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.config import LANG
from chaifi.core.exceptions import ChaifiError, InvalidAmountError, StorageError
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.money import format_cents, to_cents
from chaifi.database.models.transaction import PaymentMethod, Transaction
from chaifi.schemas.transaction import TransactionCreate
from chaifi.services.stock_service import StockService
from chaifi.services.summary_service import SummaryService

logger = get_i18n_logger(__name__)


class TransactionService:
    """Service for the sales ledger"""

    @staticmethod
    async def record_sale(db: AsyncSession, sale: TransactionCreate) -> Transaction:
        """
        Record a sale: take its stock, store it, roll it into the summaries.

        Process:
        1. Validate and decrement stock for every line (all lines or none)
        2. Insert the transaction with a snapshot of each line's name and price
        3. Add its amounts to the daily, weekly and monthly rows
        4. Commit once

        Any failure rolls the session back, leaving stock, ledger and
        summaries exactly as they were.

        Raises:
            NotFoundError: A line references an unknown menu item
            InsufficientStockError: A line asks for more than is in stock
            InvalidAmountError: An amount does not fit in integer cents
            StorageError: The database rejected the write
        """
        lines = [line.model_dump() for line in sale.items]
        day = sale.date.isoformat()

        try:
            items = await StockService.reserve_stock(db, lines)

            snapshot = []
            for line in sale.items:
                item = items[line.id]
                price_cents = to_cents(line.price) if line.price is not None else item.price_cents
                snapshot.append({
                    "id": item.id,
                    "name": line.name or item.name,
                    "price": format_cents(price_cents),
                    "quantity": line.quantity,
                })

            transaction = Transaction(
                date=day,
                items=snapshot,
                total_cents=to_cents(sale.total_amount),
                payment_method=sale.payment_method,
                split_payment=(
                    sale.split_payment.as_document()
                    if sale.payment_method == PaymentMethod.SPLIT and sale.split_payment
                    else None
                ),
                biller_name=sale.biller_name,
                creditor=sale.creditor,
                extras=sale.extras,
            )
            db.add(transaction)
            await db.flush()

            await SummaryService.apply_transaction(db, transaction)
            await db.commit()

        except ChaifiError:
            await db.rollback()
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("sale.failed", language=LANG, date=day, error=str(e))
            raise StorageError("Could not record the sale") from e
        except (ValueError, OverflowError) as e:
            await db.rollback()
            logger.error("sale.invalid_amount", language=LANG, date=day, error=str(e))
            raise InvalidAmountError("Amount out of range", {"totalAmount": str(sale.total_amount)}) from e

        logger.info(
            "sale.recorded",
            language=LANG,
            transaction_id=transaction.id,
            date=day,
            total=transaction.total_amount,
            payment_method=transaction.payment_method.value,
            lines=len(snapshot)
        )
        return transaction

    # === Reads ===

    @staticmethod
    async def list_transactions(db: AsyncSession, limit: Optional[int] = None) -> List[Transaction]:
        """All transactions, newest first"""
        query = select(Transaction).order_by(Transaction.created_at.desc())
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def list_by_date(db: AsyncSession, day: str) -> List[Transaction]:
        result = await db.execute(
            select(Transaction)
            .where(Transaction.date == day)
            .order_by(Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_by_range(db: AsyncSession, start_date: str, end_date: str) -> List[Transaction]:
        """Transactions with start_date <= date <= end_date, newest first"""
        result = await db.execute(
            select(Transaction)
            .where(Transaction.date >= start_date, Transaction.date <= end_date)
            .order_by(Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    # === Deletes ===
    # None of these touch the summaries; see SummaryService.retract_* for that.

    @staticmethod
    async def _commit_delete(db: AsyncSession, statement, scope: str) -> int:
        try:
            result = await db.execute(statement.execution_options(synchronize_session=False))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("sale.delete_failed", language=LANG, scope=scope, error=str(e))
            raise StorageError("Could not delete transactions") from e
        logger.info("sale.deleted", language=LANG, scope=scope, count=result.rowcount)
        return result.rowcount

    @staticmethod
    async def delete_all(db: AsyncSession) -> int:
        return await TransactionService._commit_delete(db, delete(Transaction), "all")

    @staticmethod
    async def delete_by_date(db: AsyncSession, day: str) -> int:
        return await TransactionService._commit_delete(
            db, delete(Transaction).where(Transaction.date == day), day
        )

    @staticmethod
    async def delete_by_item_and_date(db: AsyncSession, item_id: str, day: str) -> int:
        """
        Delete every transaction of the day that has a line for item_id.

        The whole transaction goes, including its other lines.
        """
        matching = [t.id for t in await TransactionService.list_by_date(db, day) if t.contains_item(item_id)]
        if not matching:
            return 0
        return await TransactionService._commit_delete(
            db, delete(Transaction).where(Transaction.id.in_(matching)), f"{item_id}@{day}"
        )
