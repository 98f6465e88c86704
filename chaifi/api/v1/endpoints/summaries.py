"""
Sales summary endpoints: daily, weekly and monthly rollups
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Path, Query

from chaifi.core.dependencies import DbDependency, CurrentUser, AdminUser
from chaifi.database.models.summary import DailySummary, MonthlySummary, WeeklySummary
from chaifi.schemas.summary import (
    DailySummaryResponse, MonthlySummaryResponse, RetractResponse, WeeklySummaryResponse
)
from chaifi.services.summary_service import SummaryService

router = APIRouter(tags=["Summaries"])

MonthKey = Path(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM")
LimitQuery = Query(None, ge=1, le=1000)


# === Daily ===

@router.get("/daily", response_model=List[DailySummaryResponse])
async def list_daily_summaries(db: DbDependency, current_user: CurrentUser, limit: Optional[int] = LimitQuery):
    return await SummaryService.list_daily(db, limit)


@router.get("/daily/{day}", response_model=DailySummaryResponse)
async def get_daily_summary(day: date, db: DbDependency, current_user: CurrentUser):
    return await SummaryService.require(db, DailySummary, day.isoformat())


@router.delete("/daily/{day}", response_model=RetractResponse)
async def clear_day(day: date, db: DbDependency, admin: AdminUser):
    """
    Delete a day's transactions and summary, and take its totals off the
    week and month (admin only)
    """
    deleted = await SummaryService.retract_day(db, day.isoformat())
    return RetractResponse(period=day.isoformat(), deleted_count=deleted)


# === Weekly ===

@router.get("/weekly", response_model=List[WeeklySummaryResponse])
async def list_weekly_summaries(db: DbDependency, current_user: CurrentUser, limit: Optional[int] = LimitQuery):
    return await SummaryService.list_weekly(db, limit)


@router.get("/weekly/{week_start}", response_model=WeeklySummaryResponse)
async def get_weekly_summary(week_start: date, db: DbDependency, current_user: CurrentUser):
    return await SummaryService.require(db, WeeklySummary, week_start.isoformat())


@router.delete("/weekly/{week_start}", response_model=RetractResponse)
async def clear_week(week_start: date, db: DbDependency, admin: AdminUser):
    """Delete a week's transactions and summary, and take its totals off the month (admin only)"""
    deleted = await SummaryService.retract_week(db, week_start.isoformat())
    return RetractResponse(period=week_start.isoformat(), deleted_count=deleted)


# === Monthly ===

@router.get("/monthly", response_model=List[MonthlySummaryResponse])
async def list_monthly_summaries(db: DbDependency, current_user: CurrentUser, limit: Optional[int] = LimitQuery):
    return await SummaryService.list_monthly(db, limit)


@router.get("/monthly/{month}", response_model=MonthlySummaryResponse)
async def get_monthly_summary(db: DbDependency, current_user: CurrentUser, month: str = MonthKey):
    return await SummaryService.require(db, MonthlySummary, month)


@router.delete("/monthly/{month}", response_model=RetractResponse)
async def clear_month(db: DbDependency, admin: AdminUser, month: str = MonthKey):
    """Delete a month's transactions and summary (admin only)"""
    deleted = await SummaryService.retract_month(db, month)
    return RetractResponse(period=month, deleted_count=deleted)
