"""
User Pydantic schemas for authentication
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from chaifi.database.models.user import UserRole


class Token(BaseModel):
    """OAuth2 token response; keys stay snake_case as OAuth2 clients expect"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """Public view of a user"""
    id: int
    username: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
