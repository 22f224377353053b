"""Membership-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class MembershipTypeCreate(BaseModel):
    """Schema for creating a new membership type."""

    name: str = Field(..., min_length=1, max_length=100)


class MembershipTypeResponse(BaseModel):
    """Schema for membership type information returned by the API."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserMembershipCreate(BaseModel):
    """Schema for assigning a membership type to the current user."""

    membership_type_id: int
