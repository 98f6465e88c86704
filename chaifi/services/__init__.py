from chaifi.services.stock_service import StockService
from chaifi.services.summary_service import SummaryService
from chaifi.services.transaction_service import TransactionService
from chaifi.services.menu_service import MenuService

__all__ = ['StockService', 'SummaryService', 'TransactionService', 'MenuService']
