"""
Menu catalog endpoints
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query, status

from chaifi.core.dependencies import DbDependency, CurrentUser, AdminUser
from chaifi.schemas.menu_item import ItemSales, MenuItemCreate, MenuItemResponse, MenuItemUpdate
from chaifi.services.menu_service import MenuService

router = APIRouter(tags=["Menu"])


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    db: DbDependency,
    current_user: CurrentUser,
    search: Optional[str] = Query(None, description="Matches name or category, case-insensitive")
):
    """All menu items, by category then name"""
    return await MenuService.list_items(db, search)


@router.get("/sales", response_model=List[ItemSales])
async def menu_item_sales(
    db: DbDependency,
    current_user: CurrentUser,
    sales_date: date = Query(..., alias="date")
):
    """Servings sold and revenue per item on one day"""
    return await MenuService.item_sales(db, sales_date.isoformat())


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: str, db: DbDependency, current_user: CurrentUser):
    return await MenuService.get_item(db, item_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MenuItemResponse)
async def create_menu_item(item: MenuItemCreate, db: DbDependency, admin: AdminUser):
    """Add an item to the menu (admin only)"""
    return await MenuService.create_item(db, item)


@router.patch("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: str,
    item: MenuItemUpdate,
    db: DbDependency,
    current_user: CurrentUser
):
    """Change some fields of a menu item"""
    return await MenuService.update_item(db, item_id, item)
