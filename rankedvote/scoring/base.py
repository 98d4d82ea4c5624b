"""Abstract base class for scoring modes."""

from abc import ABC, abstractmethod

from rankedvote.models import VoteCounts


class ScoringMode(ABC):
    """Criterion used to decide both the majority winner and the losers.

    Each scoring mode reduces an option's VoteCounts to a single number.
    Modes are registered via the @register_scoring_mode decorator in
    rankedvote/scoring/__init__.py.
    """

    key: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this scoring mode."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this scoring mode works."""
        return ""

    @abstractmethod
    def metric(self, counts: VoteCounts) -> int:
        """Return the value compared between options for this mode."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
