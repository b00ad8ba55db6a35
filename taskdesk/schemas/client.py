from datetime import datetime
from typing import List, Optional
import re

from pydantic import BaseModel, Field, field_validator


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class RemindPasswordRequest(BaseModel):
    """Schema for a password reminder request. ``username`` is the email."""

    username: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "username": "client@example.com"
            }
        }


class ResetPasswordRequest(BaseModel):
    """Schema for setting a new password with a reset token"""

    token: str = Field(
        min_length=64,
        max_length=64,
        description="Reset token from the reminder email"
    )
    password: str = Field(
        min_length=8,
        max_length=100,
        description="Password must be 8-100 characters"
    )

    @field_validator("token")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        if not re.fullmatch(r"[0-9a-f]{64}", v):
            raise ValueError("Token must be 64 lowercase hexadecimal characters")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """
        Validate password meets strength requirements.

        Requirements:
        - At least 8 characters (already checked by min_length)
        - At least one uppercase letter
        - At least one lowercase letter
        - At least one digit
        """
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class ClientResponse(BaseModel):
    """Schema for client data in responses (no password, no reset token)"""

    id: int
    name: str
    email: str
    is_active: bool
    token_created_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True  # Allow creating from ORM model


class MessageResponse(BaseModel):
    """Schema for simple message responses"""
    message: str
    success: bool = True


# ============================================================
# Error Schemas
# ============================================================

class FieldErrorDetail(BaseModel):
    loc: List[str]
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failure"""

    detail: List[FieldErrorDetail]

    class Config:
        json_schema_extra = {
            "example": {
                "detail": [
                    {"loc": ["body", "username"], "msg": "User not found", "type": "invalid"}
                ]
            }
        }


class ErrorResponse(BaseModel):
    """Schema for error responses"""

    detail: str

    class Config:
        json_schema_extra = {
            "example": {
                "detail": "Internal server error"
            }
        }
