# session.py
import logging
from dataclasses import dataclass
from typing import List, Optional

from roster import RosterStatus, RosterStore
from wheel import Entrant, RandomSource, Segment, SpinResolution, SpinStatus, layout, resolve_spin

logger = logging.getLogger(__name__)


@dataclass
class SpinState:
    cumulative_rotation: float = 0.0
    is_spinning: bool = False
    last_winner_id: Optional[str] = None


class WheelSession:
    """
    One wheel, one roster, at most one spin in flight.

    request_spin() freezes the current wedge layout and picks the winner up
    front; commit_spin() records the win once the animation has played out.
    Roster edits are refused in between so the wedges on screen never drift
    from the wedges the winner was resolved against.
    """

    def __init__(self, roster: RosterStore, random_source=None):
        self.roster = roster
        self.random_source = random_source or RandomSource()
        self.state = SpinState()
        self._pending: Optional[SpinResolution] = None
        self._pending_segments: List[Segment] = []

    # ---- Wheel ----
    def segments(self) -> List[Segment]:
        """Wedges to draw: the frozen snapshot during a spin, the live roster otherwise."""
        if self.state.is_spinning:
            return list(self._pending_segments)
        return layout(self.roster.get_all())

    @property
    def last_winner(self) -> Optional[Entrant]:
        if self.state.last_winner_id is None:
            return None
        return self.roster.get(self.state.last_winner_id)

    @property
    def pending(self) -> Optional[SpinResolution]:
        return self._pending

    def request_spin(self) -> SpinResolution:
        if self.state.is_spinning:
            return SpinResolution(SpinStatus.ALREADY_SPINNING, self.state.cumulative_rotation)

        segments = layout(self.roster.get_all())
        if not segments:
            logger.info("[SPIN] Refused: roster is empty")
            return SpinResolution(SpinStatus.EMPTY_ROSTER, self.state.cumulative_rotation)

        resolution = resolve_spin(self.state.cumulative_rotation, segments, self.random_source.sample())
        self._pending_segments = segments
        self._pending = resolution
        self.state.is_spinning = True
        self.state.last_winner_id = None
        self.state.cumulative_rotation = resolution.new_rotation
        return resolution

    def commit_spin(self) -> Optional[Entrant]:
        """Record the pending winner. Returns None when no spin is in flight."""
        if not self.state.is_spinning or self._pending is None:
            return None

        winner = self._pending.winner
        self.roster.increment_wins(winner.id)
        self.state.last_winner_id = winner.id
        self.state.is_spinning = False
        self._pending = None
        self._pending_segments = []
        logger.info(f"[SPIN] {winner.name} wins (rotation {self.state.cumulative_rotation:.1f})")
        return winner

    def spin(self) -> SpinResolution:
        """Request and commit in one step, for callers with no animation."""
        resolution = self.request_spin()
        if resolution.status is SpinStatus.OK:
            self.commit_spin()
        return resolution

    # ---- Roster edits (blocked mid-spin) ----
    def add(self, name: str) -> RosterStatus:
        if self.state.is_spinning:
            return RosterStatus.SPIN_IN_PROGRESS
        return self.roster.add(name)

    def remove(self, entrant_id: str) -> RosterStatus:
        if self.state.is_spinning:
            return RosterStatus.SPIN_IN_PROGRESS
        return self.roster.remove(entrant_id)

    def decrement_wins(self, entrant_id: str) -> RosterStatus:
        if self.state.is_spinning:
            return RosterStatus.SPIN_IN_PROGRESS
        return self.roster.decrement_wins(entrant_id)

    def reset_all(self) -> RosterStatus:
        if self.state.is_spinning:
            return RosterStatus.SPIN_IN_PROGRESS
        return self.roster.reset_all()
