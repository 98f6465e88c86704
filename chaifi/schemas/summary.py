"""
Summary Pydantic schemas for the rollup endpoints
"""
from datetime import datetime
from typing import Optional

from chaifi.schemas.base import CamelModel


class SummaryBase(CamelModel):
    id: str
    total_amount: str
    gpay_amount: str
    cash_amount: str
    order_count: int
    created_at: Optional[datetime] = None


class DailySummaryResponse(SummaryBase):
    date: str


class WeeklySummaryResponse(SummaryBase):
    week_start: str
    week_end: str


class MonthlySummaryResponse(SummaryBase):
    month: str


class RetractResponse(CamelModel):
    """Result of clearing a day, week or month"""
    period: str
    deleted_count: int
