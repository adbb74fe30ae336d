import math
from collections.abc import Mapping
from numbers import Integral, Real

from tabbie.exceptions import (
    BallotAlreadySubmitted,
    BallotNotSubmitted,
    BallotValidationError,
)
from tabbie.participant import Participant
from tabbie.utils import MAX_SCORE, MIN_SCORE, competition_ranks


class ScoreRecord:
    """A judge's score and rank for one speaker. Blank records hold zeros."""

    def __init__(self, speaker: Participant, score: float = 0, rank: int = 0):
        self.speaker = speaker
        self.score = score
        self.rank = rank

    def __repr__(self):
        return f"{self.speaker}: {self.score} (rank {self.rank})"


def _score_record(speaker, entry):
    """Reads one `(score, rank)` entry: a finite score and a whole-number rank."""
    if not isinstance(entry, (tuple, list)) or len(entry) != 2:
        raise BallotValidationError(
            f"Entry for {speaker.name} must be a (score, rank) pair, not {entry!r}."
        )
    score, rank = entry
    if isinstance(score, bool) or not isinstance(score, Real) or not math.isfinite(score):
        raise BallotValidationError(
            f"Score for {speaker.name} must be a number, not {score!r}."
        )
    if isinstance(rank, bool) or not isinstance(rank, Integral):
        raise BallotValidationError(
            f"Rank for {speaker.name} must be a whole number, not {rank!r}."
        )
    return ScoreRecord(speaker, score, rank)


class Ballot:
    """
    One judge's scoresheet for one room of one round.

    Ballots are created blank when the draw is generated, one per judge per room,
    and are never created afterward. Once submitted, a ballot stays submitted.

    Attributes:
        id (int): Sequential identifier, unique across the tournament.
        round_id (int): Round the ballot belongs to.
        room_id (int): Room the ballot belongs to.
        judge (Participant): Judge who fills in the ballot.
        scores (list[ScoreRecord]): One record per speaker in the room.
        submitted (bool): Whether the ballot has been committed.
    """

    def __init__(self, id: int, round_id: int, room_id: int, judge: Participant, speakers):
        self.id = id
        self.round_id = round_id
        self.room_id = room_id
        self.judge = judge
        self.scores = [ScoreRecord(s) for s in speakers]
        self.submitted = False

    def __repr__(self):
        return f"Ballot {self.id} ({self.judge}, room {self.room_id})"

    @property
    def speakers(self):
        return [s.speaker for s in self.scores]

    def get_score(self, speaker_id: int):
        """Returns the ScoreRecord for `speaker_id`, or None if the speaker is not on this ballot."""
        for record in self.scores:
            if record.speaker.id == speaker_id:
                return record
        return None

    def validate_scores(self, scores: dict):
        """
        Checks submitted scores against this ballot without changing it.

        Args:
            scores (dict[int, tuple[float, int]]): Speaker id to (score, rank).

        Returns:
            list[ScoreRecord]: New records in ballot order.

        Raises:
            BallotValidationError: If speakers, scores, or ranks are out of contract.
        """
        if not isinstance(scores, Mapping):
            raise BallotValidationError(
                f"Ballot {self.id} scores must map speaker ids to (score, rank) pairs."
            )
        expected_ids = {s.id for s in self.speakers}
        submitted_ids = set(scores)
        if submitted_ids != expected_ids:
            missing = sorted(expected_ids - submitted_ids)
            unknown = sorted(submitted_ids - expected_ids)
            raise BallotValidationError(
                f"Ballot {self.id} speakers do not match the room "
                f"(missing: {missing}, unknown: {unknown})."
            )

        records = [_score_record(s, scores[s.id]) for s in self.speakers]

        if not all(MIN_SCORE < r.score <= MAX_SCORE for r in records):
            raise BallotValidationError(
                f"Scores must be greater than {MIN_SCORE} and at most {MAX_SCORE}."
            )
        if any(r.rank < 1 for r in records):
            raise BallotValidationError("All speakers must be given a rank.")

        expected_ranks = competition_ranks([r.score for r in records])
        for record, expected in zip(records, expected_ranks):
            if record.rank != expected:
                raise BallotValidationError(
                    f"Rank for {record.speaker.name} is incorrect. Based on the scores, "
                    f"it should be rank {expected}."
                )

        return records

    def submit(self, scores: dict):
        """Validates and commits a first submission."""
        if self.submitted:
            raise BallotAlreadySubmitted(self.id)
        self.scores = self.validate_scores(scores)
        self.submitted = True

    def overwrite(self, scores: dict):
        """Validates and replaces the scores of an already-submitted ballot."""
        if not self.submitted:
            raise BallotNotSubmitted(self.id)
        self.scores = self.validate_scores(scores)
