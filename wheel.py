# wheel.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

# =========================
# HARD-CODED WHEEL CONSTANTS
# =========================
BASE_WEIGHT = 1.0
PENALTY = 0.2                  # weight lost per recorded win
MIN_WEIGHT = 0.1               # floor, nobody ever drops to zero chance
MIN_SPINS = 5                  # full turns added to every spin
FULL_TURN = 360.0
# =========================


@dataclass(frozen=True)
class Entrant:
    id: str
    name: str
    wins: int = 0


@dataclass(frozen=True)
class WeightedEntrant:
    entrant: Entrant
    weight: float


@dataclass(frozen=True)
class Segment:
    entrant: Entrant
    start_angle: float
    end_angle: float

    @property
    def segment_angle(self) -> float:
        return self.end_angle - self.start_angle


class SpinStatus(Enum):
    OK = "ok"
    EMPTY_ROSTER = "empty_roster"
    ALREADY_SPINNING = "already_spinning"


@dataclass(frozen=True)
class SpinResolution:
    status: SpinStatus
    new_rotation: float
    winning_segment: Optional[Segment] = None

    @property
    def winner(self) -> Optional[Entrant]:
        return self.winning_segment.entrant if self.winning_segment else None


# ---- Weights ----
def weight(wins: int) -> float:
    """Selection weight for an entrant with ``wins`` recorded wins."""
    wins = max(0, wins)
    return max(MIN_WEIGHT, BASE_WEIGHT - wins * PENALTY)


def weighted(entrants: Sequence[Entrant]) -> List[WeightedEntrant]:
    return [WeightedEntrant(e, weight(e.wins)) for e in entrants]


# ---- Geometry ----
def layout(entrants: Sequence[Entrant]) -> List[Segment]:
    """
    Split the full circle into one wedge per entrant, sized by weight.
    Wedges follow the roster order clockwise from 0 (top). An empty list
    means there is nothing to spin.
    """
    if not entrants:
        return []
    weights = np.array([w.weight for w in weighted(entrants)], dtype=float)
    total = float(weights.sum())
    if total <= 0:
        return []

    ends = np.cumsum(weights / total * FULL_TURN)
    ends[-1] = FULL_TURN  # absorb cumsum drift
    starts = np.insert(ends[:-1], 0, 0.0)
    return [
        Segment(e, float(s), float(t))
        for e, s, t in zip(entrants, starts, ends)
    ]


def pointer_angle(rotation_deg: float) -> float:
    """Angle in the unrotated wheel that sits under the top pointer."""
    final = rotation_deg % FULL_TURN
    return (FULL_TURN - final) % FULL_TURN


def segment_at(segments: Sequence[Segment], angle: float) -> Segment:
    """
    Return the wedge whose [start, end) holds ``angle``. Falls back to the
    last wedge when rounding pushes the angle past every end point.
    """
    ends = np.array([s.end_angle for s in segments], dtype=float)
    # first end strictly greater than angle, same lookup as the pie pointer
    idx = int(np.searchsorted(ends, angle, side="right"))
    if idx >= len(segments):
        idx = len(segments) - 1
    return segments[idx]


# ---- Rotation math ----
def resolve_spin(previous_rotation: float, segments: Sequence[Segment], sample: float) -> SpinResolution:
    """
    Advance the wheel by MIN_SPINS full turns plus ``sample`` degrees and
    report which wedge ends up under the pointer. Pure: the same inputs
    always give the same rotation and winner.
    """
    if not segments:
        return SpinResolution(SpinStatus.EMPTY_ROSTER, previous_rotation)

    offset = sample % FULL_TURN
    if offset >= FULL_TURN:  # tiny negatives round up to a full turn
        offset = 0.0
    spin_delta = MIN_SPINS * FULL_TURN + offset
    new_rotation = previous_rotation + spin_delta
    alpha = pointer_angle(new_rotation)
    winning = segment_at(segments, alpha)
    logger.debug(f"[SPIN] delta={spin_delta:.3f} rotation={new_rotation:.3f} "
                 f"pointer={alpha:.3f} -> {winning.entrant.name}")
    return SpinResolution(SpinStatus.OK, new_rotation, winning)


# ---- Randomness ----
class RandomSource:
    """Uniform angles in [0, 360). seed=0 draws fresh entropy."""

    def __init__(self, seed: int = 0):
        self._rng = np.random.default_rng(None if seed == 0 else seed)

    def sample(self) -> float:
        return float(self._rng.uniform(0.0, FULL_TURN))
