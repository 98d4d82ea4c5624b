"""Unweighted mention tally scoring."""

from rankedvote.models import VoteCounts
from rankedvote.scoring import register_scoring_mode
from rankedvote.scoring.base import ScoringMode


@register_scoring_mode
class TallyScoring(ScoringMode):
    """Options are compared by how many ballots mention them at any rank."""

    key = "tally"

    @property
    def name(self) -> str:
        return "Tally"

    @property
    def description(self) -> str:
        return "Count every mention of an option, regardless of rank"

    def metric(self, counts: VoteCounts) -> int:
        return counts.tally_count
