"""Per-perk score storage used by the voting flow."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from perk_manager.models.perk import Perk

__all__ = ["Found", "NotFound", "LedgerResult", "VoteLedger"]


@dataclass(frozen=True)
class Found:
    """The perk exists; ``score`` is its current score."""

    perk_id: int
    score: int


@dataclass(frozen=True)
class NotFound:
    """No perk with ``perk_id`` exists."""

    perk_id: int


LedgerResult = Found | NotFound


class VoteLedger:
    """Thin wrapper around the ``perk.votes`` column."""

    def __init__(self, session: Session) -> None:
        """Initialize the ledger with a SQLAlchemy session."""
        self.session = session

    def get(self, perk_id: int) -> LedgerResult:
        """Return the current score of a perk."""
        score = self.session.execute(
            select(Perk.votes).where(Perk.id == perk_id)
        ).scalar_one_or_none()
        if score is None:
            return NotFound(perk_id)
        return Found(perk_id, int(score))

    def apply_delta(self, perk_id: int, delta: int) -> LedgerResult:
        """Add ``delta`` to a perk's score and return the updated score.

        The increment is a single ``UPDATE ... SET votes = votes + :delta``
        statement so concurrent voters on the same perk never lose updates.
        Nothing is committed here; the caller owns the transaction.
        """
        result = self.session.execute(
            update(Perk)
            .where(Perk.id == perk_id)
            .values(votes=Perk.votes + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return NotFound(perk_id)
        # Reload so any Perk already in the identity map reflects the new score.
        perk = self.session.get(Perk, perk_id, populate_existing=True)
        if perk is None:  # pragma: no cover - deleted between statements
            return NotFound(perk_id)
        return Found(perk_id, perk.votes)
