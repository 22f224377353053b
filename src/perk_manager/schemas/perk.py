"""Perk-related Pydantic schemas."""

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PerkCreate(BaseModel):
    """Schema for creating a new perk."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    region: str = Field(..., min_length=1, max_length=100)
    membership_type: str = Field(..., min_length=1, description="Membership type name")
    expiry_date: datetime.date


class PerkResponse(BaseModel):
    """Schema for perk information returned by the API."""

    id: int
    title: str
    description: str
    region: str
    expiry_date: datetime.date
    votes: int
    membership_type: str
    created_by: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_relations(cls, data: object) -> object:
        if isinstance(data, dict):
            return data

        membership = getattr(data, "membership_type", None)
        creator = getattr(data, "created_by", None)
        return {
            "id": getattr(data, "id", None),
            "title": getattr(data, "title", None),
            "description": getattr(data, "description", None),
            "region": getattr(data, "region", None),
            "expiry_date": getattr(data, "expiry_date", None),
            "votes": getattr(data, "votes", 0),
            "membership_type": getattr(membership, "name", membership),
            "created_by": getattr(creator, "username", None),
        }

    model_config = ConfigDict(from_attributes=True)


PerkSort = Literal["votes", "expiry"]
