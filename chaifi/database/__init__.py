"""
Database package initialization
Centralized imports for all database components
"""
from chaifi.database.base import Base
from chaifi.database.session import Store, get_db

__all__ = ['Base', 'Store', 'get_db']
