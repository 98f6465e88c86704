"""
Database models package initialization
Centralized imports for all database models
"""
from chaifi.database.models.user import User, UserRole
from chaifi.database.models.menu_item import MenuItem, StockStatus, ResetScope
from chaifi.database.models.transaction import Transaction, PaymentMethod
from chaifi.database.models.summary import (
    DailySummary, WeeklySummary, MonthlySummary, SummaryMixin
)

__all__ = [
    # User and Authentication
    'User',
    'UserRole',

    # Menu and stock
    'MenuItem',
    'StockStatus',
    'ResetScope',

    # Sales ledger
    'Transaction',
    'PaymentMethod',

    # Rollups
    'SummaryMixin',
    'DailySummary',
    'WeeklySummary',
    'MonthlySummary',
]
