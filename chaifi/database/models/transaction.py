"""
Transaction database model
One row per sale rung up at the counter
"""
from datetime import datetime, timezone
from enum import StrEnum

from sqlalchemy import Column, Integer, String, DateTime, JSON, Enum as SQLAlchemyEnum

from chaifi.core.money import format_cents, to_cents
from chaifi.database.base import Base
from chaifi.database.models.menu_item import new_id


class PaymentMethod(StrEnum):
    """How the customer paid"""
    CASH = "cash"
    GPAY = "gpay"
    SPLIT = "split"      # Part Google Pay, part cash; amounts in split_payment


class Transaction(Base):
    """
    A recorded sale.

    Line items are embedded as a JSON list of {"id", "name", "price",
    "quantity"} dicts, "id" being the MenuItem id. The reference is weak on
    purpose: a sale stays readable after its item is renamed or removed.

    Transactions are never edited. They disappear only through the bulk
    delete operations of the ledger.
    """
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=new_id)

    # Business day the sale belongs to ("YYYY-MM-DD"); not derived from created_at
    date = Column(String(10), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    items = Column(JSON, nullable=False, default=list)

    # === Payment ===
    total_cents = Column(Integer, nullable=False)
    payment_method = Column(SQLAlchemyEnum(PaymentMethod), nullable=False)
    split_payment = Column(JSON, nullable=True)  # {"gpayAmount": "12.00", "cashAmount": "8.00"}

    # === Who and for whom ===
    biller_name = Column(String(100), nullable=False)
    creditor = Column(String(255), nullable=True)  # Customer running a tab
    extras = Column(JSON, nullable=True)

    @property
    def total_amount(self) -> str:
        return format_cents(self.total_cents)

    def payment_split(self) -> tuple[int, int]:
        """
        Return (gpay_cents, cash_cents) for the rollups.

        A split sale without its split payload counts as zero on both sides,
        while still adding its total to the summaries.
        """
        if self.payment_method == PaymentMethod.GPAY:
            return self.total_cents, 0
        if self.payment_method == PaymentMethod.CASH:
            return 0, self.total_cents
        split = self.split_payment or {}
        return to_cents(split.get("gpayAmount")), to_cents(split.get("cashAmount"))

    def contains_item(self, item_id: str) -> bool:
        return any(line.get("id") == item_id for line in self.items or [])

    def __repr__(self):
        return (
            f"<Transaction {self.id} - {self.date} - "
            f"{len(self.items or [])} lines - {self.total_amount} ({self.payment_method})>"
        )
