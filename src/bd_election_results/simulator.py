"""
What-if vote swing between BNP and the NCP/Jamaat alliance.

A swing of ``p`` percent moves ``round(p% of the two-party total)`` votes
from BNP to the alliance in every seat (negative ``p`` moves them the other
way). The report's inline script runs the same arithmetic in the browser;
this module is the reference used by the command line and the tests.
"""

from typing import List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
import numpy as np

from .data_structures import CombinedSeat, Winner


MIN_SWING = -50.0
MAX_SWING = 50.0
DEFAULT_SWING = 10.0


def clamp_percentage(percentage: float) -> float:
    """Clamp a swing to the range offered by the report controls."""
    return float(min(MAX_SWING, max(MIN_SWING, percentage)))


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, halves towards +inf (browser ``Math.round``)."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5).astype(np.int64)


def apply_swing(bnp_votes: Union[int, Sequence[int], np.ndarray],
                alliance_votes: Union[int, Sequence[int], np.ndarray],
                percentage: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Shift votes from BNP to the alliance.

    Parameters
    ----------
    bnp_votes, alliance_votes : int or array-like
        Per-seat vote counts
    percentage : float
        Swing in percent of the two-party total, clamped to [-50, 50]

    Returns
    -------
    tuple of np.ndarray
        New BNP and alliance votes, never negative
    """
    bnp = np.atleast_1d(np.asarray(bnp_votes, dtype=np.int64))
    alliance = np.atleast_1d(np.asarray(alliance_votes, dtype=np.int64))
    if bnp.shape != alliance.shape:
        raise ValueError(f"Vote arrays differ in shape: {bnp.shape} vs {alliance.shape}")

    pct = clamp_percentage(percentage)
    change = round_half_up((bnp + alliance) * (pct / 100.0))

    new_bnp = np.maximum(0, bnp - change)
    new_alliance = np.maximum(0, alliance + change)
    return new_bnp, new_alliance


def seat_winner(bnp_votes: int, alliance_votes: int,
                has_bnp: bool = True, has_alliance: bool = True) -> Optional[Winner]:
    """
    Decide a seat.

    When only one side stands in the seat, it wins unless the other side has
    been given more votes by a swing. Otherwise strictly more votes wins and
    a tie has no winner.
    """
    if has_bnp and not has_alliance and bnp_votes >= alliance_votes:
        return Winner.BNP
    if has_alliance and not has_bnp and alliance_votes >= bnp_votes:
        return Winner.ALLIANCE
    if bnp_votes > alliance_votes:
        return Winner.BNP
    if alliance_votes > bnp_votes:
        return Winner.ALLIANCE
    return None


@dataclass
class SimulationResult:
    """Seat-level and overall outcome after a swing."""
    percentage: float
    bnp_votes: np.ndarray
    alliance_votes: np.ndarray
    winners: List[Optional[Winner]]

    @property
    def bnp_wins(self) -> int:
        return sum(1 for w in self.winners if w is Winner.BNP)

    @property
    def alliance_wins(self) -> int:
        return sum(1 for w in self.winners if w is Winner.ALLIANCE)

    @property
    def bnp_total_votes(self) -> int:
        return int(self.bnp_votes.sum())

    @property
    def alliance_total_votes(self) -> int:
        return int(self.alliance_votes.sum())

    @property
    def leader(self) -> Optional[Winner]:
        """Side with more seats, None when level."""
        return seat_winner(self.bnp_wins, self.alliance_wins)


def simulate(seats: Sequence[CombinedSeat], percentage: float = DEFAULT_SWING) -> SimulationResult:
    """
    Apply a swing to every seat of the report.

    ``percentage=0`` reproduces the winners decided by the report, including
    seats contested by only one side.
    """
    bnp = np.array([s.bnp_votes for s in seats], dtype=np.int64)
    alliance = np.array([s.alliance_votes for s in seats], dtype=np.int64)

    if len(seats) == 0:
        return SimulationResult(clamp_percentage(percentage), bnp, alliance, [])

    new_bnp, new_alliance = apply_swing(bnp, alliance, percentage)
    winners = [
        seat_winner(int(b), int(a), has_bnp=s.has_bnp, has_alliance=s.has_alliance)
        for s, b, a in zip(seats, new_bnp, new_alliance)
    ]

    return SimulationResult(
        percentage=clamp_percentage(percentage),
        bnp_votes=new_bnp,
        alliance_votes=new_alliance,
        winners=winners,
    )
