"""
User request/response schemas.

Passwords only ever appear in CreateUserRequest; every response model is
built from UserWithoutPassword.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from orderhub.models.user import UserRole
from orderhub.schemas.common import CamelModel, Email, UtcDatetime, check_password_bytes


class CreateUserRequest(BaseModel):
    name: str = Field(description="Full name", examples=["João Silva"])
    email: Email = Field(description="Login email, unique per user", examples=["joao@example.com"])
    password: str = Field(
        min_length=6, description="At least 6 characters, at most 72 bytes", examples=["senha123"]
    )
    role: UserRole = Field(default=UserRole.CUSTOMER, description="Defaults to customer")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserWithoutPassword(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    created_at: UtcDatetime
    updated_at: Optional[UtcDatetime] = None


class CreateUserResponse(CamelModel):
    new_user: UserWithoutPassword
