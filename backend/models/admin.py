"""
Admin model - accounts allowed to triage reports.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .report import PyObjectId, utcnow


class Admin(BaseModel):
    """
    Admin account. Reporters never have accounts.

    Only the bcrypt hash of the password is stored.
    """

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    username: str = Field(..., min_length=3, description="Lowercase login name")
    password_hash: str = Field(..., description="bcrypt hash")
    display_name: str = Field(default="Admin")
    last_login: Optional[datetime] = Field(default=None)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Config:
        populate_by_name = True
