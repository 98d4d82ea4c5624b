"""Tests for core data models."""

import pytest

from rankedvote.models import (
    Ballot,
    FinalResult,
    RankOutOfRangeError,
    StageResult,
    VoteCounts,
    VoteCountsBuilder,
)


class TestBallot:
    def test_choices_become_tuple(self):
        ballot = Ballot(["A", "B"], voter="u1")
        assert ballot.choices == ("A", "B")
        assert len(ballot) == 2
        assert list(ballot) == ["A", "B"]

    def test_without_preserves_order_and_voter(self):
        ballot = Ballot(["C", "A", "B", "D"], voter="u7")
        assert ballot.without({"A", "D"}) == Ballot(["C", "B"], voter="u7")

    def test_without_everything(self):
        ballot = Ballot(["A"], voter="u1")
        assert ballot.without({"A"}).choices == ()

    def test_without_leaves_ballot_unchanged(self):
        ballot = Ballot(["A", "B"])
        ballot.without({"A"})
        assert ballot.choices == ("A", "B")

    def test_copy_is_equal_but_distinct(self):
        ballot = Ballot(["A", "B"], voter="u1")
        copied = ballot.copy()
        assert copied == ballot
        assert copied is not ballot

    def test_to_dict(self):
        assert Ballot(["A", "B"], voter="u1").to_dict() == {
            "voter": "u1",
            "choices": ["A", "B"],
        }


class TestVoteCountsBuilder:
    def test_starts_at_zero(self):
        builder = VoteCountsBuilder(3)
        assert builder.vote_counts == [0, 0, 0]

    def test_add_vote(self):
        builder = VoteCountsBuilder(3)
        builder.add_vote(0)
        builder.add_vote(2)
        builder.add_vote(2)
        assert builder.vote_counts == [1, 0, 2]

    @pytest.mark.parametrize("rank", [-1, 3, 10])
    def test_rank_out_of_range(self, rank):
        builder = VoteCountsBuilder(3)
        with pytest.raises(RankOutOfRangeError, match="must be >= 0"):
            builder.add_vote(rank)

    def test_negative_num_options(self):
        with pytest.raises(RankOutOfRangeError):
            VoteCountsBuilder(-1)

    def test_build_scores(self):
        builder = VoteCountsBuilder(3)
        for rank in (0, 0, 1, 2):
            builder.add_vote(rank)
        counts = builder.build(borda_weight=3)
        assert counts.vote_counts == (2, 1, 1)
        # 2*3 + 1*2 + 1*1
        assert counts.borda_score == 9
        assert counts.tally_count == 4

    def test_build_negative_contributions(self):
        """Positions at or past the weight count zero or negative."""
        builder = VoteCountsBuilder(4)
        builder.add_vote(3)
        counts = builder.build(borda_weight=2)
        assert counts.borda_score == -1

    def test_build_with_zero_weight(self):
        builder = VoteCountsBuilder(3)
        builder.add_vote(1)
        builder.add_vote(2)
        assert builder.build(borda_weight=0).borda_score == -3


class TestVoteCounts:
    def test_properties(self):
        counts = VoteCounts(vote_counts=(0, 2, 1), borda_score=0, tally_count=3)
        assert counts.num_options == 3
        assert counts.first_rank_votes == 0
        assert counts.has_votes

    def test_no_votes(self):
        counts = VoteCounts(vote_counts=(0, 0, 0), borda_score=0, tally_count=0)
        assert not counts.has_votes


class TestStageResult:
    def setup_method(self):
        self.stage = StageResult(
            vote_counts={
                "A": VoteCounts((2, 0), 4, 2),
                "B": VoteCounts((0, 1), 1, 1),
                "C": VoteCounts((0, 0), 0, 0),
            },
            ballots=(Ballot(["A", "B"], "u1"), Ballot(["A"], "u2")),
        )

    def test_num_ballots(self):
        assert self.stage.num_ballots == 2

    def test_first_rank_votes(self):
        assert self.stage.first_rank_votes() == {"A": 2, "B": 0, "C": 0}

    def test_options_with_votes(self):
        assert self.stage.options_with_votes() == ["A", "B"]

    def test_options_with_first_rank_votes(self):
        assert self.stage.options_with_first_rank_votes() == ["A"]

    def test_to_dict(self):
        data = self.stage.to_dict()
        assert data["vote_counts"]["A"] == {
            "vote_counts": [2, 0],
            "borda_score": 4,
            "tally_count": 2,
        }
        assert data["ballots"][0] == {"voter": "u1", "choices": ["A", "B"]}


class TestFinalResult:
    def test_defaults(self):
        result = FinalResult()
        assert result.total_voters == 0
        assert result.stage_results == []
        assert result.winner is None
        assert result.tied_options is None

    def test_from_stages(self):
        stage = StageResult(
            vote_counts={"A": VoteCounts((1,), 1, 1)},
            ballots=(Ballot(["A"], "u1"),),
        )
        result = FinalResult.from_stages([stage], winner="A")
        assert result.total_voters == 1
        assert result.num_rounds == 1
        assert result.winner == "A"

    def test_to_dict_numbers_rounds(self):
        stage = StageResult(vote_counts={"A": VoteCounts((1,), 1, 1)}, ballots=())
        result = FinalResult(total_voters=0, stage_results=[stage, stage], tied_options=["A"])
        data = result.to_dict()
        assert [r["round"] for r in data["rounds"]] == [1, 2]
        assert data["tied_options"] == ["A"]
        assert data["winner"] is None
