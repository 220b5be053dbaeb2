"""
Pydantic schemas for setup and authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """
    Request schema for POST /login.

    Fields are optional at the schema level so a missing one is reported
    as 400 by the route rather than as a 422 validation error.
    """
    email: Optional[str] = Field(default=None, description="Account email (case-sensitive)")
    password: Optional[str] = Field(default=None, description="Plain text password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "admin@example.com",
                "password": "admin"
            }
        }
    )


class LoginResponse(BaseModel):
    # camelCase on the wire: the browser client stores this value as-is
    userId: int = Field(..., description="Identifier to send as x-user-id on every later call")
    access_token: str = Field(..., description="Signed token carrying the same identity")
    token_type: str = Field("bearer")


class UserSummary(BaseModel):
    id: int
    email: str


class SetupResponse(BaseModel):
    message: str
    user: UserSummary


class MessageResponse(BaseModel):
    message: str
