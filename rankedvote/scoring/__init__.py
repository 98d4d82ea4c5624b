"""Scoring modes for deciding winners and losers in each round."""

from .base import ScoringMode

# Scoring mode registry - import modes here to register them
_scoring_modes: dict[str, type[ScoringMode]] = {}


def register_scoring_mode(mode_class: type[ScoringMode]) -> type[ScoringMode]:
    """Decorator to register a scoring mode class under its key."""
    _scoring_modes[mode_class.key] = mode_class
    return mode_class


def get_scoring_mode(key: str) -> type[ScoringMode] | None:
    """Return the scoring mode class registered under key, if any."""
    return _scoring_modes.get(key)


def get_all_scoring_modes() -> list[type[ScoringMode]]:
    """Return all registered scoring mode classes."""
    return list(_scoring_modes.values())
