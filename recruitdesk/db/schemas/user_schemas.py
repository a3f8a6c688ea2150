# recruitdesk/db/schemas/user_schemas.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional

from .feature_types import Role


class UserContext(BaseModel):
    """
    The acting user as seen by permission checks.

    `role` stays a plain string so rows holding an unexpected role can still
    be represented (and denied).
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None
    supervisor_id: Optional[str] = None


class UserCreate(BaseModel):
    username: str = Field(..., max_length=50)
    role: str
    supervisor_id: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: Role
    supervisor_id: Optional[str] = None
    created_at: datetime


__all__ = ["UserContext", "UserCreate", "UserResponse"]
