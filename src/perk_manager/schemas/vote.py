"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from perk_manager.services.vote_state import VoteState


class VoteResponse(BaseModel):
    """Result of an upvote or downvote request."""

    perk_id: int
    score: int | None = Field(
        ...,
        description="Updated score, or null when the perk does not exist",
    )
    vote_state: VoteState = Field(..., description="The caller's vote after this request")
