"""Plurality (first-choice) scoring."""

from rankedvote.models import VoteCounts
from rankedvote.scoring import register_scoring_mode
from rankedvote.scoring.base import ScoringMode


@register_scoring_mode
class PluralityScoring(ScoringMode):
    """Options are compared by their first-rank vote counts.

    This is the default mode when neither Borda nor tally scoring is
    requested.
    """

    key = "plurality"

    @property
    def name(self) -> str:
        return "Plurality"

    @property
    def description(self) -> str:
        return "Compare options by first-choice votes only"

    def metric(self, counts: VoteCounts) -> int:
        return counts.first_rank_votes
