"""Core data models for ballots and per-round tabulation results."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Self


class RankOutOfRangeError(ValueError):
    """Raised when a vote is recorded at a rank outside [0, num_options).

    This signals a malformed ballot upstream (e.g. a ballot longer than
    the number of registered options).
    """
    pass


@dataclass(frozen=True)
class Option:
    """A candidate option, identified by its unique name."""
    name: str


@dataclass(frozen=True)
class Ballot:
    """One voter's ranked preferences.

    Attributes:
        choices: Option names, most preferred first. Each name appears at
            most once.
        voter: Voter identifier, kept for traceability only

    Example:
        >>> ballot = Ballot(["A", "B", "C"], voter="u1")
        >>> ballot.without({"B"})
        Ballot(choices=('A', 'C'), voter='u1')
    """
    choices: tuple[str, ...]
    voter: str = ""

    def __post_init__(self):
        object.__setattr__(self, "choices", tuple(self.choices))

    def __len__(self) -> int:
        return len(self.choices)

    def __iter__(self) -> Iterator[str]:
        return iter(self.choices)

    def without(self, losers: set[str] | frozenset[str]) -> Self:
        """Return a new ballot with the given options removed, order preserved."""
        return type(self)(
            tuple(name for name in self.choices if name not in losers),
            self.voter,
        )

    def copy(self) -> Self:
        return type(self)(self.choices, self.voter)

    def to_dict(self) -> dict[str, Any]:
        return {"voter": self.voter, "choices": list(self.choices)}


@dataclass(frozen=True)
class VoteCounts:
    """Finalised vote counts for one option in one round.

    Attributes:
        vote_counts: Number of ballots ranking the option at each position,
            indexed 0..num_options-1. The length always equals the number of
            registered options, even after eliminations.
        borda_score: sum of vote_counts[i] * (weight - i)
        tally_count: sum of vote_counts
    """
    vote_counts: tuple[int, ...]
    borda_score: int
    tally_count: int

    @property
    def num_options(self) -> int:
        return len(self.vote_counts)

    @property
    def first_rank_votes(self) -> int:
        return self.vote_counts[0]

    @property
    def has_votes(self) -> bool:
        return any(count > 0 for count in self.vote_counts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vote_counts": list(self.vote_counts),
            "borda_score": self.borda_score,
            "tally_count": self.tally_count,
        }


class VoteCountsBuilder:
    """Mutable accumulator used while a round is being tallied.

    Only the tabulator sees a builder; callers get the VoteCounts
    produced by build().
    """

    def __init__(self, num_options: int):
        if num_options < 0:
            raise RankOutOfRangeError("num_options must be >= 0")
        self.num_options = num_options
        self.vote_counts = [0] * num_options

    def add_vote(self, rank: int) -> None:
        if rank < 0 or rank >= self.num_options:
            raise RankOutOfRangeError(
                f"Vote rank {rank} must be >= 0 and < {self.num_options} (total options)"
            )
        self.vote_counts[rank] += 1

    def build(self, borda_weight: int) -> VoteCounts:
        # Positions at or past the weight contribute negatively; kept as-is.
        borda_score = sum(
            count * (borda_weight - rank)
            for rank, count in enumerate(self.vote_counts)
        )
        return VoteCounts(
            vote_counts=tuple(self.vote_counts),
            borda_score=borda_score,
            tally_count=sum(self.vote_counts),
        )


@dataclass(frozen=True)
class StageResult:
    """Snapshot of one round of tabulation.

    Attributes:
        vote_counts: Mapping of every registered option name -> VoteCounts,
            in registration order
        ballots: The ballots that produced these counts (an independent copy)
    """
    vote_counts: dict[str, VoteCounts]
    ballots: tuple[Ballot, ...]

    @property
    def num_ballots(self) -> int:
        return len(self.ballots)

    def first_rank_votes(self) -> dict[str, int]:
        return {name: counts.first_rank_votes for name, counts in self.vote_counts.items()}

    def options_with_votes(self) -> list[str]:
        """Options with at least one vote at any rank position."""
        return [name for name, counts in self.vote_counts.items() if counts.has_votes]

    def options_with_first_rank_votes(self) -> list[str]:
        return [
            name for name, counts in self.vote_counts.items()
            if counts.first_rank_votes > 0
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "vote_counts": {
                name: counts.to_dict() for name, counts in self.vote_counts.items()
            },
            "ballots": [ballot.to_dict() for ballot in self.ballots],
        }


@dataclass
class FinalResult:
    """Outcome of a complete election.

    Attributes:
        total_voters: Number of ballots cast in round 1
        stage_results: One StageResult per round, in order
        winner: Name of the winning option, or None
        tied_options: Options left in an unresolved tie, or None if the
            election produced a winner
    """
    total_voters: int = 0
    stage_results: list[StageResult] = field(default_factory=list)
    winner: str | None = None
    tied_options: list[str] | None = None

    @property
    def num_rounds(self) -> int:
        return len(self.stage_results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_voters": self.total_voters,
            "winner": self.winner,
            "tied_options": self.tied_options,
            "rounds": [
                {"round": number, **stage.to_dict()}
                for number, stage in enumerate(self.stage_results, start=1)
            ],
        }

    @classmethod
    def from_stages(cls, stages: Iterable[StageResult], winner: str | None = None,
                    tied_options: list[str] | None = None) -> Self:
        stages = list(stages)
        return cls(
            total_voters=stages[0].num_ballots if stages else 0,
            stage_results=stages,
            winner=winner,
            tied_options=tied_options,
        )
