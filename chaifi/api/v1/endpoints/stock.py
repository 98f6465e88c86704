"""
Stock endpoints: manual stock edits and the stock reset
"""
from fastapi import APIRouter

from chaifi.core.dependencies import DbDependency, CurrentUser, AdminUser
from chaifi.schemas.menu_item import MenuItemResponse, StockReset, StockResetResponse, StockUpdate
from chaifi.services.stock_service import StockService

router = APIRouter(tags=["Stock"])


@router.post("/reset", response_model=StockResetResponse)
async def reset_stock(body: StockReset, db: DbDependency, admin: AdminUser):
    """
    Start a new counter session: every item goes to zero stock and stays
    available (admin only)
    """
    items = await StockService.reset_stock(db, body.reset_type)
    return StockResetResponse(
        message=f"Stock reset for {len(items)} items",
        reset_type=body.reset_type,
        items=[MenuItemResponse.model_validate(item) for item in items]
    )


@router.put("/{item_id}", response_model=MenuItemResponse)
async def set_stock(item_id: str, body: StockUpdate, db: DbDependency, current_user: CurrentUser):
    """Set an item's stock; availability follows"""
    return await StockService.set_stock(db, item_id, body.stock_quantity)
