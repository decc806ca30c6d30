"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from tonswap.schemas.user import PASSWORD_MIN_LENGTH


class Token(BaseModel):
    """Access token response schema."""

    access_token: str
    token_type: str = "bearer"


class UserRegister(BaseModel):
    """Schema for user registration."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description=f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
    )


class MessageResponse(BaseModel):
    """Generic message response schema."""

    message: str
