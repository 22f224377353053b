"""Business logic services for the Perk Manager application."""

from .vote_state import VoteDecision, VoteDirection, VoteState, apply_vote
from .vote_tracker import SessionVoteTracker, get_vote_tracker

__all__ = [
    "VoteDecision",
    "VoteDirection",
    "VoteState",
    "apply_vote",
    "SessionVoteTracker",
    "get_vote_tracker",
]
