"""
Account schemas. Emails are stored and compared lowercased, so both
sign-up and login normalize the address before anything else sees it.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class _Credentials(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserCreate(_Credentials):
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)


class UserLogin(_Credentials):
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of an account; the user id in bookings is `email`."""

    model_config = {"from_attributes": True}

    id: int
    email: str
    is_active: bool
    created_at: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
