"""Weighted positional (Borda) scoring."""

from rankedvote.models import VoteCounts
from rankedvote.scoring import register_scoring_mode
from rankedvote.scoring.base import ScoringMode


@register_scoring_mode
class BordaScoring(ScoringMode):
    """Options are compared by their Borda score.

    A vote at rank position i (0 = first choice) is worth (weight - i)
    points. With weight B:
    - 1st choice = B points
    - 2nd choice = B-1 points
    - ...
    - positions at or beyond B are worth zero or negative points

    The negative contributions are part of the scoring formula, so a
    small weight with long ballots can push scores below zero.
    """

    key = "borda"

    def __init__(self, weight: int):
        self.weight = weight

    @property
    def name(self) -> str:
        return "Borda"

    @property
    def description(self) -> str:
        return f"Points by position: 1st = {self.weight} pts, 2nd = {self.weight - 1} pts, ..."

    def metric(self, counts: VoteCounts) -> int:
        return counts.borda_score

    def __repr__(self) -> str:
        return f"BordaScoring(weight={self.weight})"
