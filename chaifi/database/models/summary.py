"""
Daily, weekly and monthly sales rollups
Maintained incrementally by SummaryService as sales are recorded
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from chaifi.core.money import format_cents
from chaifi.database.base import Base
from chaifi.database.models.menu_item import new_id


class SummaryMixin:
    """
    Running totals shared by the three rollup tables.

    Every row is keyed by one period column (period_field) holding a unique
    string key. Amounts are integer cents. Retractions subtract without
    clamping, so a row can legitimately go negative.
    """
    period_field = ""

    id = Column(String(36), primary_key=True, default=new_id)
    total_cents = Column(Integer, nullable=False, default=0)
    gpay_cents = Column(Integer, nullable=False, default=0)
    cash_cents = Column(Integer, nullable=False, default=0)
    order_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @property
    def period_key(self) -> str:
        return getattr(self, self.period_field)

    @property
    def total_amount(self) -> str:
        return format_cents(self.total_cents)

    @property
    def gpay_amount(self) -> str:
        return format_cents(self.gpay_cents)

    @property
    def cash_amount(self) -> str:
        return format_cents(self.cash_cents)

    def totals(self) -> tuple[int, int, int, int]:
        """(total_cents, gpay_cents, cash_cents, order_count)"""
        return self.total_cents, self.gpay_cents, self.cash_cents, self.order_count

    def __repr__(self):
        return (
            f"<{type(self).__name__} {self.period_key} - "
            f"{self.order_count} orders - {self.total_amount} "
            f"(gpay {self.gpay_amount}, cash {self.cash_amount})>"
        )


class DailySummary(SummaryMixin, Base):
    """One row per business day"""
    __tablename__ = "daily_summaries"
    period_field = "date"

    date = Column(String(10), unique=True, nullable=False, index=True)


class WeeklySummary(SummaryMixin, Base):
    """One row per Monday-to-Sunday week"""
    __tablename__ = "weekly_summaries"
    period_field = "week_start"

    week_start = Column(String(10), unique=True, nullable=False, index=True)
    week_end = Column(String(10), nullable=False)


class MonthlySummary(SummaryMixin, Base):
    """One row per calendar month, keyed "YYYY-MM" """
    __tablename__ = "monthly_summaries"
    period_field = "month"

    month = Column(String(7), unique=True, nullable=False, index=True)
