"""
API v1 router - combines all v1 endpoints
"""
from fastapi import APIRouter

from chaifi.api.v1.endpoints import auth, menu, stock, transactions, summaries

# Create main v1 router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(menu.router, prefix="/menu")
api_router.include_router(stock.router, prefix="/stock")
api_router.include_router(transactions.router, prefix="/transactions")
api_router.include_router(summaries.router, prefix="/summaries")
