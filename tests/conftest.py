"""Shared fixtures for building tournaments with synthetic rosters."""

from pathlib import Path

import pytest

from tabbie.tournament import Tournament
from tabbie.utils import competition_ranks

TESTS_DIR = Path(__file__).resolve().parent
SEED = 1337


def roster_rows(speakers, judges, speaker_institutions=None, judge_institution="Independent"):
    """Build roster records for `speakers` speakers and `judges` judges.

    Speakers rotate through `speaker_institutions`; every judge shares `judge_institution`.
    """
    speaker_institutions = speaker_institutions or ["Inst A", "Inst B", "Inst C", "Inst D"]
    rows = []
    for i in range(speakers):
        rows.append(
            {
                "name": f"Speaker {i:02d}",
                "email": f"speaker{i:02d}@example.org",
                "role": "Speaker",
                "institution": speaker_institutions[i % len(speaker_institutions)],
                "country": "Testland",
            }
        )
    for i in range(judges):
        rows.append(
            {
                "name": f"Judge {i:02d}",
                "email": f"judge{i:02d}@example.org",
                "role": "Judge",
                "institution": judge_institution,
                "country": "Testland",
            }
        )
    return rows


def build_tournament(speakers=14, judges=2, seed=SEED, check_in=True, **kwargs):
    """Return a tournament with a synthetic roster, everyone checked in by default."""
    tournament = Tournament(name="test-open", seed=seed)
    tournament.load_rows(roster_rows(speakers, judges, **kwargs))
    if check_in:
        tournament.set_all_pending_to_present()
    return tournament


def score_sheet(ballot, score_for):
    """Build a valid scores mapping for `ballot` using `score_for(speaker)`."""
    scores = [score_for(record.speaker) for record in ballot.scores]
    ranks = competition_ranks(scores)
    return {
        record.speaker.id: (score, rank)
        for record, score, rank in zip(ballot.scores, scores, ranks)
    }


def submit_round(tournament, round_id, score_for):
    """Submit every ballot of a round."""
    for ballot in tournament.get_ballots(round_id):
        tournament.submit_ballot(ballot.id, score_sheet(ballot, score_for))


@pytest.fixture
def make_tournament():
    return build_tournament


@pytest.fixture
def submit():
    return submit_round


@pytest.fixture
def sheet():
    return score_sheet
