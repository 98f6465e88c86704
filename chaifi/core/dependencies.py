"""
Shared dependencies across the application

Usage example:
    @router.get("/transactions")
    async def list_transactions(
        db: DbDependency,
        current_user: CurrentUser
    ):
        # db is AsyncSession
        # current_user is User model
        ...
"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chaifi.database.session import get_db
from chaifi.database.models.user import User
from chaifi.core.security import get_current_user, get_current_admin_user


# === Database Dependency ===

DbDependency = Annotated[AsyncSession, Depends(get_db)]
"""
Async database session dependency, one per request.
"""


# === User Authentication Dependencies ===

CurrentUser = Annotated[User, Depends(get_current_user)]
"""
Current authenticated user (any role).

Returns the SQLAlchemy User model, not a Pydantic schema.
"""


AdminUser = Annotated[User, Depends(get_current_admin_user)]
"""
Current user verified as ADMIN.

Required for destructive operations: stock reset, deletions, retractions
and adding menu items.

Example:
    async def delete_all(admin: AdminUser, db: DbDependency):
        # Only admins reach here
        ...
"""
