"""Tests for ballot validation, submission, and overwrite."""

import pytest

from tabbie.ballot import Ballot
from tabbie.exceptions import (
    BallotAlreadySubmitted,
    BallotNotSubmitted,
    BallotValidationError,
    ValidationError,
)
from tabbie.participant import Participant, Role
from tabbie.utils import competition_ranks


def make_person(id, role=Role.SPEAKER, institution_id=1):
    return Participant(
        id=id,
        name=f"P{id}",
        email=f"p{id}@example.org",
        role=role,
        institution_id=institution_id,
    )


A, B, C = make_person(1), make_person(2), make_person(3)
JUDGE = make_person(9, role=Role.JUDGE, institution_id=2)


def blank_ballot():
    return Ballot(id=1, round_id=1, room_id=101, judge=JUDGE, speakers=[A, B, C])


class TestCompetitionRanks:

    @pytest.mark.parametrize(
        "scores,expected",
        [
            ([90, 90, 70], [1, 1, 3]),
            ([70, 80, 90], [3, 2, 1]),
            ([75.5, 75.5, 75.5], [1, 1, 1]),
            ([60, 90, 60, 80], [3, 1, 3, 2]),
            ([], []),
        ],
    )
    def test_ranks(self, scores, expected):
        assert competition_ranks(scores) == expected


class TestBlankBallot:

    def test_blank_records_for_every_speaker(self):
        ballot = blank_ballot()
        assert ballot.speakers == [A, B, C]
        assert all(r.score == 0 and r.rank == 0 for r in ballot.scores)
        assert not ballot.submitted

    def test_get_score(self):
        ballot = blank_ballot()
        assert ballot.get_score(B.id).speaker is B
        assert ballot.get_score(42) is None


class TestSubmission:

    def test_tied_scores_share_rank_and_next_rank_skips(self):
        ballot = blank_ballot()
        ballot.submit({A.id: (90, 1), B.id: (90, 1), C.id: (70, 3)})

        assert ballot.submitted
        assert [(r.score, r.rank) for r in ballot.scores] == [(90, 1), (90, 1), (70, 3)]

    def test_sequential_ranks_for_tied_scores_rejected(self):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError) as excinfo:
            ballot.submit({A.id: (90, 1), B.id: (90, 2), C.id: (70, 3)})

        assert "should be rank 1" in str(excinfo.value)
        assert not ballot.submitted
        assert all(r.score == 0 for r in ballot.scores)

    @pytest.mark.parametrize("bad_score", [0, -5, 100.5, 101])
    def test_score_out_of_range_rejected(self, bad_score):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError):
            ballot.submit({A.id: (bad_score, 1), B.id: (50, 2), C.id: (40, 3)})
        assert not ballot.submitted

    @pytest.mark.parametrize("bad_score", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_score_rejected(self, bad_score):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError):
            ballot.submit({A.id: (bad_score, 1), B.id: (50, 2), C.id: (40, 3)})
        assert not ballot.submitted
        assert all(r.score == 0 for r in ballot.scores)

    @pytest.mark.parametrize(
        "entry",
        [
            ("80", 1),
            (80, "1"),
            (80, 1.0),
            (True, 1),
            (80, True),
            80,
            None,
            (80,),
            (80, 1, 0),
        ],
    )
    def test_malformed_entry_rejected(self, entry):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError):
            ballot.submit({A.id: entry, B.id: (70, 2), C.id: (60, 3)})
        assert not ballot.submitted

    @pytest.mark.parametrize("scores", [None, [(80, 1), (70, 2), (60, 3)]])
    def test_scores_must_be_a_mapping(self, scores):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError):
            ballot.submit(scores)
        assert not ballot.submitted

    def test_full_marks_accepted(self):
        ballot = blank_ballot()
        ballot.submit({A.id: (100, 1), B.id: (0.5, 3), C.id: (50, 2)})
        assert ballot.submitted

    def test_missing_rank_rejected(self):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError) as excinfo:
            ballot.submit({A.id: (80, 0), B.id: (70, 2), C.id: (60, 3)})
        assert "rank" in str(excinfo.value)

    def test_speakers_must_match_room(self):
        ballot = blank_ballot()
        with pytest.raises(BallotValidationError):
            ballot.submit({A.id: (80, 1), B.id: (70, 2)})
        with pytest.raises(BallotValidationError):
            ballot.submit({A.id: (80, 1), B.id: (70, 2), C.id: (60, 3), 42: (50, 4)})

    def test_validation_errors_are_value_errors(self):
        ballot = blank_ballot()
        with pytest.raises(ValueError):
            ballot.submit({A.id: (80, 2), B.id: (70, 2), C.id: (60, 3)})

    def test_resubmission_rejected(self):
        ballot = blank_ballot()
        ballot.submit({A.id: (80, 1), B.id: (70, 2), C.id: (60, 3)})

        with pytest.raises(BallotAlreadySubmitted):
            ballot.submit({A.id: (60, 3), B.id: (70, 2), C.id: (80, 1)})

        assert ballot.submitted
        assert ballot.get_score(A.id).score == 80


class TestOverwrite:

    def test_overwrite_replaces_scores(self):
        ballot = blank_ballot()
        ballot.submit({A.id: (80, 1), B.id: (70, 2), C.id: (60, 3)})
        ballot.overwrite({A.id: (60, 3), B.id: (70, 2), C.id: (80, 1)})

        assert ballot.submitted
        assert ballot.get_score(A.id).score == 60
        assert ballot.get_score(C.id).rank == 1

    def test_overwrite_requires_prior_submission(self):
        ballot = blank_ballot()
        with pytest.raises(BallotNotSubmitted):
            ballot.overwrite({A.id: (80, 1), B.id: (70, 2), C.id: (60, 3)})
        assert not ballot.submitted

    def test_invalid_overwrite_keeps_previous_scores(self):
        ballot = blank_ballot()
        ballot.submit({A.id: (80, 1), B.id: (70, 2), C.id: (60, 3)})

        with pytest.raises(ValidationError):
            ballot.overwrite({A.id: (80, 1), B.id: (80, 2), C.id: (60, 3)})

        assert ballot.submitted
        assert [r.score for r in ballot.scores] == [80, 70, 60]
