"""Request/response schemas for registration and login."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Email and password sent to /register and /login. Emptiness is checked by the service."""

    email: str = Field(default="", max_length=255, description="Account email")
    password: str = Field(default="", description="Plain password (hashed before storage)")


class TokenResponse(BaseModel):
    """JWT access token and the account role returned after successful login."""

    token: str = Field(..., description="JWT access token")
    role: str = Field(..., description="Role of the authenticated account")


class CurrentUser(BaseModel):
    """Claims of the authenticated caller (id, role) for dependency injection."""

    id: int
    role: str
