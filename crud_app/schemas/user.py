"""
User Pydantic Schemas

Schemas:
- SignUpInput: registration data (name, email, password)
- SignInInput: credentials for sign-in
- RefreshTokenInput: refresh token to exchange
- User: public user data (never exposes the password hash)
- TokenPair: tokens returned by sign-in and refresh
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignUpInput(BaseModel):
    """Schema for user registration."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Display name",
        examples=["John Doe"],
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["john@example.com"],
    )

    # bcrypt only looks at the first 72 bytes
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,
        description="Password (6-72 characters)",
        examples=["SecurePass123"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class SignInInput(BaseModel):
    """Schema for sign-in."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, max_length=72, description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class RefreshTokenInput(BaseModel):
    """Schema for exchanging a refresh token."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token from sign-in")


class User(BaseModel):
    """
    Schema for user responses.

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    registered_at: datetime = Field(..., description="When the user signed up")

    model_config = ConfigDict(from_attributes=True)


class TokenPair(BaseModel):
    """Tokens issued by sign-in and refresh."""

    access_token: str = Field(..., description="JWT for the Authorization header")
    refresh_token: str = Field(..., description="Opaque token for POST /auth/refresh")
    token_type: str = Field(default="bearer", description="Always 'bearer'")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
