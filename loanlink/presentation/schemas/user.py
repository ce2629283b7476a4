"""User directory Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from loanlink.domain.entities import Role


class RegisterUserSchema(BaseModel):
    """Schema for POST /users request body."""

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: Optional[str] = Field(None, description="borrower (default) or manager")
    photo_url: Optional[str] = Field(None, max_length=2048)


class UpdateUserSchema(BaseModel):
    """Schema for PATCH /admin/users/role/{email} request body."""

    role: Optional[str] = None
    suspend: Optional[bool] = None
    suspend_reason: Optional[str] = Field(None, max_length=1000)


class UserSchema(BaseModel):
    """Schema for a user account in responses."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    role: Role
    photo_url: Optional[str] = None
    suspended: bool
    suspend_reason: str
    created_at: datetime


class RegistrationSchema(BaseModel):
    message: str
    user: UserSchema
