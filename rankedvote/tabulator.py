"""Instant-runoff tabulation engine."""

import logging
from typing import Iterable, Sequence

from rankedvote.models import Ballot, Option, StageResult, VoteCountsBuilder
from rankedvote.scoring.base import ScoringMode
from rankedvote.scoring.borda import BordaScoring
from rankedvote.scoring.plurality import PluralityScoring
from rankedvote.scoring.tally import TallyScoring

logger = logging.getLogger(__name__)


MAJORITY_THRESHOLD = 0.5


class ConfigurationError(ValueError):
    """Raised when the tabulator is configured or invoked inconsistently."""
    pass


class UnknownOptionError(ValueError):
    """Raised when a ballot names an option that was never registered."""
    pass


class Tabulator:
    """Stateless round-by-round instant-runoff tabulator.

    The caller drives the rounds:
    1. tally() the ballots into a StageResult
    2. find_winner() - stop if an option holds a strict majority
    3. find_losers() - the option(s) to eliminate this round
    4. advance() - strip the losers from every ballot and re-tally
    5. Repeat from 2

    Winner and losers are judged by one of three scoring modes:
    - Plurality (default): first-rank votes
    - Borda (borda_weight > 0): weighted positional score
    - Tally (use_tally=True): mentions at any rank

    Tiebreaker: when every option still holding first-rank votes is tied
    for last, each tied option's elimination is simulated one round ahead.
    The options whose removal leaves the fewest first-rank votes with the
    other tied options are eliminated.
    """

    def __init__(self, options: Iterable[Option | str], borda_weight: int = 0,
                 use_tally: bool = False):
        self.options = [
            option if isinstance(option, Option) else Option(option)
            for option in (options or [])
        ]
        if not self.options:
            raise ConfigurationError("options are required")

        names = [option.name for option in self.options]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"option names must be unique: {names}")

        if isinstance(borda_weight, bool) or not isinstance(borda_weight, int):
            raise ConfigurationError(f"borda_weight must be an integer, got {borda_weight!r}")
        if borda_weight < 0:
            raise ConfigurationError(f"borda_weight must be >= 0, got {borda_weight}")
        if borda_weight > 0 and use_tally:
            raise ConfigurationError("borda_weight and use_tally cannot both be enabled")

        self.borda_weight = borda_weight
        self.use_tally = use_tally

        self.scoring: ScoringMode
        if borda_weight > 0:
            self.scoring = BordaScoring(borda_weight)
        elif use_tally:
            self.scoring = TallyScoring()
        else:
            self.scoring = PluralityScoring()

    @property
    def option_names(self) -> list[str]:
        return [option.name for option in self.options]

    @property
    def num_options(self) -> int:
        return len(self.options)

    @staticmethod
    def same_options(options_a: Sequence[str] | None, options_b: Sequence[str] | None) -> bool:
        """Check whether two option lists hold the same names, in any order.

        Only valid because each name appears at most once in either list.
        """
        if options_a is None or options_b is None:
            return False
        return len(options_a) == len(options_b) and all(name in options_b for name in options_a)

    def tally(self, ballots: Iterable[Ballot]) -> StageResult:
        """Count every ballot into a new StageResult.

        Raises:
            UnknownOptionError: If a ballot names an unregistered option
            RankOutOfRangeError: If a ballot is longer than the option set
        """
        ballots = tuple(ballot.copy() for ballot in ballots)
        builders = {name: VoteCountsBuilder(self.num_options) for name in self.option_names}

        for ballot in ballots:
            for rank, name in enumerate(ballot.choices):
                if name not in builders:
                    raise UnknownOptionError(
                        f"Ballot {ballot.voter!r} names unknown option {name!r}"
                    )
                builders[name].add_vote(rank)

        vote_counts = {
            name: builder.build(self.borda_weight) for name, builder in builders.items()
        }
        return StageResult(vote_counts=vote_counts, ballots=ballots)

    def find_winner(self, stage: StageResult) -> str | None:
        """Return the first option (in registry order) with a strict majority."""
        metrics = {name: self.scoring.metric(counts) for name, counts in stage.vote_counts.items()}
        total = sum(metrics.values())
        logger.debug("%s totals: %s (total %s)", self.scoring.name, metrics, total)

        if total == 0:
            return None

        for name, value in metrics.items():
            if value / total > MAJORITY_THRESHOLD:
                return name
        return None

    def find_losers(self, stage: StageResult) -> list[str]:
        """Determine which option(s) to eliminate this round.

        Options without any votes at any rank are ignored when looking
        for the minimum, but are still returned if their metric happens
        to equal it.

        Returns:
            Loser names, in registry order

        Raises:
            ConfigurationError: If no option has any votes
        """
        metrics = {name: self.scoring.metric(counts) for name, counts in stage.vote_counts.items()}

        voted = stage.options_with_votes()
        if not voted:
            raise ConfigurationError("cannot determine losers: no option has any votes")
        lowest = min(metrics[name] for name in voted)

        losers = [name for name, value in metrics.items() if value == lowest]

        # Tie breaker only needed if the tie spans all remaining viable options
        num_viable = len(stage.options_with_first_rank_votes())
        if len(losers) == 1 or len(losers) != num_viable:
            logger.debug("Losers at %s=%s: %s", self.scoring.key, lowest, losers)
            return losers

        return self._break_elimination_tie(stage, losers)

    def _break_elimination_tie(self, stage: StageResult, tied: list[str]) -> list[str]:
        """Simulate eliminating each tied option on its own, one round ahead.

        An option's score is the number of first-rank votes held by the
        other tied options once it is gone. Options with the lowest score
        are the losers. The simulated rounds are only tallied, never
        tie-broken again.
        """
        scores = {}
        for candidate in tied:
            simulated = self.advance(stage, [candidate])
            scores[candidate] = sum(
                simulated.vote_counts[name].first_rank_votes
                for name in tied if name != candidate
            )

        fewest = min(scores.values())
        losers = [name for name in tied if scores[name] == fewest]
        logger.debug("Elimination tiebreak among %s: scores %s, losers %s", tied, scores, losers)
        return losers

    def next_ballots(self, stage: StageResult, losers: Iterable[str]) -> list[Ballot]:
        """Return the stage's ballots with the losers removed."""
        losers = frozenset(losers)
        if not losers:
            raise ConfigurationError("losers must be passed to generate the next round")
        return [ballot.without(losers) for ballot in stage.ballots]

    def advance(self, stage: StageResult, losers: Iterable[str]) -> StageResult:
        """Eliminate the losers and tally the next round."""
        return self.tally(self.next_ballots(stage, losers))
