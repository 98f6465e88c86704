"""
Transaction ledger endpoints
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from chaifi.core.dependencies import DbDependency, CurrentUser, AdminUser
from chaifi.schemas.transaction import DeleteResponse, TransactionCreate, TransactionResponse
from chaifi.services.transaction_service import TransactionService

router = APIRouter(tags=["Transactions"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TransactionResponse)
async def record_sale(sale: TransactionCreate, db: DbDependency, current_user: CurrentUser):
    """
    Ring up a sale.

    Responds 404 if a line references an unknown item and 409 if any line
    asks for more than is in stock; in both cases nothing is recorded.
    """
    return await TransactionService.record_sale(db, sale)


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    db: DbDependency,
    current_user: CurrentUser,
    sale_date: Optional[date] = Query(None, alias="date"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=10000)
):
    """
    Transactions, newest first.

    Filter by one day (date) or by an inclusive range (start_date and
    end_date); without a filter every transaction is returned, up to limit.
    """
    if sale_date is not None:
        return await TransactionService.list_by_date(db, sale_date.isoformat())
    if start_date is not None or end_date is not None:
        if start_date is None or end_date is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="start_date and end_date must be given together"
            )
        return await TransactionService.list_by_range(db, start_date.isoformat(), end_date.isoformat())
    return await TransactionService.list_transactions(db, limit)


@router.delete("/delete-all", response_model=DeleteResponse)
async def delete_all_transactions(db: DbDependency, admin: AdminUser):
    """Delete the whole ledger; summaries are left as they are (admin only)"""
    return DeleteResponse(deleted_count=await TransactionService.delete_all(db))


@router.delete("/date/{sale_date}", response_model=DeleteResponse)
async def delete_transactions_by_date(sale_date: date, db: DbDependency, admin: AdminUser):
    return DeleteResponse(deleted_count=await TransactionService.delete_by_date(db, sale_date.isoformat()))


@router.delete("/item/{item_id}/date/{sale_date}", response_model=DeleteResponse)
async def delete_transactions_by_item_and_date(
    item_id: str,
    sale_date: date,
    db: DbDependency,
    admin: AdminUser
):
    """Delete every transaction of the day containing the item"""
    deleted = await TransactionService.delete_by_item_and_date(db, item_id, sale_date.isoformat())
    return DeleteResponse(deleted_count=deleted)
