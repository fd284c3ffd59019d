"""Session (login) request/response schemas."""

from pydantic import BaseModel, Field

from orderhub.schemas.common import CamelModel, Email
from orderhub.schemas.user import UserWithoutPassword


class CreateSessionRequest(BaseModel):
    email: Email = Field(examples=["joao@example.com"])
    password: str = Field(examples=["senha123"])


class CreateSessionResponse(CamelModel):
    token: str = Field(description="JWT for the Authorization: Bearer header")
    user_without_password: UserWithoutPassword
