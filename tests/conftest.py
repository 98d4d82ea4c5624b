"""Shared test helpers and fixtures."""

import pytest

from rankedvote.models import Ballot
from rankedvote.tabulator import Tabulator


def make_ballots(table: list[tuple[int, list[str]]]) -> list[Ballot]:
    """Build ballots from a compact table.

    Args:
        table: [(count, choices)] - each row becomes `count` identical
            ballots with sequential voter ids

    Returns:
        List of Ballot objects in table order.
    """
    ballots = []
    for count, choices in table:
        for _ in range(count):
            ballots.append(Ballot(choices, voter=f"v{len(ballots) + 1}"))
    return ballots


@pytest.fixture
def plurality():
    return Tabulator(["A", "B", "C"])


@pytest.fixture
def immediate_majority():
    """3 ballots [A,B,C], 2 ballots [B,A,C].

    First-rank: A=3, B=2, C=0. A has 3/5 → wins in round 1.
    """
    return make_ballots([
        (3, ["A", "B", "C"]),
        (2, ["B", "A", "C"]),
    ])


@pytest.fixture
def one_elimination():
    """4 [A,B,C], 3 [B,C,A], 2 [C,A,B].

    Round 1: A=4, B=3, C=2 (no majority of 9). Eliminate C.
    Round 2: A=6, B=3 → A wins.
    """
    return make_ballots([
        (4, ["A", "B", "C"]),
        (3, ["B", "C", "A"]),
        (2, ["C", "A", "B"]),
    ])


@pytest.fixture
def full_tie():
    """Two viable options tied on first-rank votes.

    2 [A], 2 [B,A]: A=2, B=2, C=0 (no votes at all).
    Removing A leaves B with 2; removing B hands A 4.
    A's elimination transfers fewer votes → A is the loser.
    """
    return make_ballots([
        (2, ["A"]),
        (2, ["B", "A"]),
    ])
