"""
User database model
Counter staff and the shop admin
"""
from datetime import datetime, timezone
from enum import StrEnum

from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLAlchemyEnum

from chaifi.database.base import Base


class UserRole(StrEnum):
    """User roles at the counter"""
    ADMIN = "admin"    # Manages menu, resets stock, clears data
    STAFF = "staff"    # Rings up sales, adjusts stock


class User(Base):
    """
    Someone who can log into the back office.

    Both default accounts are created on first start (see database.seed).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(100), nullable=False)
    role = Column(
        SQLAlchemyEnum(UserRole),
        nullable=False,
        default=UserRole.STAFF,
        index=True
    )
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def is_admin(self) -> bool:
        """Check if user has admin privileges"""
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"
