"""User and authentication Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .membership import MembershipTypeResponse


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=150,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Unique login name",
    )
    password: str = Field(..., min_length=6, max_length=128, description="Raw password")


class RegisterResponse(BaseModel):
    """Registration response containing the new account identifier."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")
    session_id: str = Field(..., description="Identifier of the login session")


class UserResponse(BaseModel):
    """Public view of a user and the membership types they hold."""

    id: int
    username: str
    memberships: list[MembershipTypeResponse]
