"""Per-session vote state machine.

Each login session remembers, per perk, whether it last upvoted, downvoted or
has no vote. A new request is resolved against that state into a score delta
and the state the session moves to:

=========  =========  =====  =========
current    requested  delta  new state
=========  =========  =====  =========
none       up         +1     upvoted
none       down       -1     downvoted
upvoted    up         -1     none
upvoted    down       -2     downvoted
downvoted  down       +1     none
downvoted  up         +2     upvoted
=========  =========  =====  =========

Repeating the same direction withdraws the vote. Switching direction withdraws
the previous vote and casts the new one in a single step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class VoteDirection(str, Enum):
    """Direction requested by a client."""

    UP = "up"
    DOWN = "down"


class VoteState(str, Enum):
    """Last recorded vote of a session on a perk."""

    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"
    NO_VOTE = "none"

    @property
    def contribution(self) -> int:
        """Return how much this state adds to a perk's score."""
        return _CONTRIBUTION[self]


_CONTRIBUTION: Final[dict[VoteState, int]] = {
    VoteState.UPVOTED: 1,
    VoteState.DOWNVOTED: -1,
    VoteState.NO_VOTE: 0,
}

_CAST: Final[dict[VoteDirection, VoteState]] = {
    VoteDirection.UP: VoteState.UPVOTED,
    VoteDirection.DOWN: VoteState.DOWNVOTED,
}


@dataclass(frozen=True)
class VoteDecision:
    """Outcome of resolving a vote request against the session state."""

    perk_id: int
    delta: int
    new_state: VoteState


def apply_vote(perk_id: int, direction: VoteDirection, current: VoteState) -> VoteDecision:
    """Resolve a vote request into a score delta and the next session state.

    Pure function: the caller persists the delta to the ledger and the new
    state to the session tracker.

    Args:
        perk_id: Perk the vote targets.
        direction: Requested direction.
        current: The session's recorded state for this perk.

    Returns:
        The delta to apply to the perk score and the session's new state.
    """
    cast = _CAST[direction]
    new_state = VoteState.NO_VOTE if current is cast else cast
    delta = new_state.contribution - current.contribution
    return VoteDecision(perk_id=perk_id, delta=delta, new_state=new_state)
