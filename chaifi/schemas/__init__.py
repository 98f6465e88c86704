from chaifi.schemas.menu_item import (
    MenuItemCreate, MenuItemUpdate, MenuItemResponse,
    StockUpdate, StockReset, StockResetResponse, ItemSales
)
from chaifi.schemas.transaction import (
    LineItem, SplitPayment, TransactionCreate,
    TransactionResponse, DeleteResponse
)
from chaifi.schemas.summary import (
    DailySummaryResponse, WeeklySummaryResponse,
    MonthlySummaryResponse, RetractResponse
)
from chaifi.schemas.user import Token, UserResponse

__all__ = [
    'MenuItemCreate', 'MenuItemUpdate', 'MenuItemResponse',
    'StockUpdate', 'StockReset', 'StockResetResponse', 'ItemSales',
    'LineItem', 'SplitPayment', 'TransactionCreate',
    'TransactionResponse', 'DeleteResponse',
    'DailySummaryResponse', 'WeeklySummaryResponse',
    'MonthlySummaryResponse', 'RetractResponse',
    'Token', 'UserResponse'
]
