"""Orchestrator: run a full instant-runoff election round by round."""

import json
import logging
from typing import Any, Iterable

from rankedvote.models import Ballot, FinalResult, RankOutOfRangeError
from rankedvote.scoring import get_all_scoring_modes, get_scoring_mode
from rankedvote.tabulator import ConfigurationError, Tabulator, UnknownOptionError

logger = logging.getLogger(__name__)


class ElectionError(Exception):
    """Error while setting up or running an election."""
    pass


def build_tabulator(options: list[str], mode: str = "plurality",
                    borda_weight: int | None = None) -> Tabulator:
    """Create a Tabulator for a scoring mode key.

    Args:
        options: Option names, in registry order
        mode: Key of a registered scoring mode ("plurality", "borda", "tally")
        borda_weight: Weight for "borda" mode; defaults to the number of options

    Raises:
        ElectionError: If the mode is unknown or the configuration is invalid
    """
    if not isinstance(mode, str) or get_scoring_mode(mode) is None:
        known = ", ".join(m.key for m in get_all_scoring_modes())
        raise ElectionError(f"Unknown scoring mode {mode!r}. Supported modes: {known}")

    try:
        if mode == "borda":
            weight = len(options) if borda_weight is None else borda_weight
            if isinstance(weight, int) and weight <= 0:
                raise ElectionError(f"Borda mode needs a positive weight, got {weight}")
            return Tabulator(options, borda_weight=weight)
        return Tabulator(options, use_tally=(mode == "tally"))
    except ConfigurationError as e:
        raise ElectionError(f"Invalid election configuration: {e}") from e


def run_election(tabulator: Tabulator, ballots: Iterable[Ballot]) -> FinalResult:
    """Tabulate rounds until a winner emerges or the remaining options are tied.

    Returns:
        FinalResult with every round's StageResult and either a winner or
        the list of tied options
    """
    stage = tabulator.tally(ballots)
    stages = [stage]
    previous_losers = None

    while True:
        round_num = len(stages)
        winner = tabulator.find_winner(stage)
        if winner is not None:
            logger.info("Winner %r after %d round(s)", winner, round_num)
            return FinalResult.from_stages(stages, winner=winner)

        remaining = stage.options_with_votes()
        if not remaining:
            # Nothing left to discriminate between the options
            tied = tabulator.option_names
            logger.info("No votes left in round %d; all options tied", round_num)
            return FinalResult.from_stages(stages, tied_options=tied)

        losers = tabulator.find_losers(stage)
        logger.debug("Round %d losers: %s", round_num, losers)

        if set(remaining) <= set(losers):
            tied = [name for name in losers if name in remaining]
            logger.info("Round %d: remaining options all tied: %s", round_num, tied)
            return FinalResult.from_stages(stages, tied_options=tied)

        if tabulator.same_options(losers, previous_losers):
            # Eliminating these losers no longer changes the ballots
            tied = stage.options_with_first_rank_votes()
            logger.info("Round %d: elimination stalled; tied: %s", round_num, tied)
            return FinalResult.from_stages(stages, tied_options=tied)

        previous_losers = losers
        stage = tabulator.advance(stage, losers)
        stages.append(stage)


def _parse_ballot(entry: Any, index: int) -> Ballot:
    if isinstance(entry, dict):
        choices = entry.get("choices")
        voter = entry.get("voter", f"voter-{index + 1}")
    else:
        choices = entry
        voter = f"voter-{index + 1}"

    if not isinstance(choices, list) or not all(isinstance(c, str) for c in choices):
        raise ElectionError(f"Ballot {index + 1} must be a list of option names")
    return Ballot(choices, str(voter))


def tabulate_document(content: bytes | str) -> FinalResult:
    """Parse a JSON election document and run the election.

    The document looks like:
        {
            "options": ["A", "B", "C"],
            "ballots": [{"voter": "u1", "choices": ["A", "B"]}, ["B", "C"]],
            "mode": "plurality",
            "borda_weight": 3
        }

    "mode" defaults to "plurality"; "borda_weight" is only used in borda mode.

    Raises:
        ElectionError: If the document is malformed or a ballot is invalid
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ElectionError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ElectionError("Election document must be a JSON object")

    options = data.get("options")
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise ElectionError("'options' must be a list of option names")

    raw_ballots = data.get("ballots", [])
    if not isinstance(raw_ballots, list):
        raise ElectionError("'ballots' must be a list")
    ballots = [_parse_ballot(entry, i) for i, entry in enumerate(raw_ballots)]

    tabulator = build_tabulator(
        options,
        mode=data.get("mode", "plurality"),
        borda_weight=data.get("borda_weight"),
    )

    try:
        return run_election(tabulator, ballots)
    except (UnknownOptionError, RankOutOfRangeError) as e:
        raise ElectionError(f"Invalid ballot: {e}") from e
