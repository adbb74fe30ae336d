from tabbie.participant import Role


class Standing:
    """
    A speaker's place in the tab. Derived from ballots on every query, never stored.

    Attributes:
        rank (int): 1-based position; ties are not collapsed.
        participant (Participant): The speaker.
        institution (Institution or None): The speaker's institution.
        total_score (float): Sum of per-round scores.
        average_score (float): Total divided by rounds with a submitted score.
        scores_by_round (dict[int, float]): Round id to the speaker's averaged score.
    """

    def __init__(self, rank, participant, institution, total_score, average_score, scores_by_round):
        self.rank = rank
        self.participant = participant
        self.institution = institution
        self.total_score = total_score
        self.average_score = average_score
        self.scores_by_round = scores_by_round

    def __repr__(self):
        return f"{self.rank}. {self.participant} ({self.total_score:g})"


def speaker_round_scores(speaker_id, ballots, rounds):
    """
    Averages a speaker's submitted scores per round.

    Args:
        speaker_id (int): Speaker to collect.
        ballots (list[Ballot]): All ballots of the tournament.
        rounds (list[Round]): Rounds to consider, in order.

    Returns:
        dict[int, float]: Round id to mean score, only for rounds with a submitted score.
    """
    scores_by_round = {}
    for r in rounds:
        round_scores = []
        for ballot in ballots:
            if not ballot.submitted or ballot.round_id != r.id:
                continue
            record = ballot.get_score(speaker_id)
            if record is not None:
                round_scores.append(record.score)
        if round_scores:
            scores_by_round[r.id] = sum(round_scores) / len(round_scores)
    return scores_by_round


def compute_standings(participants, institutions, ballots, rounds):
    """
    Builds the speaker tab from submitted ballots.

    Every speaker is listed, including speakers with no scores yet. Speakers are
    sorted by total score, highest first; the sort is stable, so equal totals
    keep the order of `participants` and still get distinct consecutive ranks.

    Returns:
        list[Standing]: Standings in rank order.
    """
    institutions_by_id = {i.id: i for i in institutions}

    rows = []
    for speaker in participants:
        if speaker.role != Role.SPEAKER:
            continue
        scores_by_round = speaker_round_scores(speaker.id, ballots, rounds)
        total_score = sum(scores_by_round.values())
        rounds_played = len(scores_by_round)
        rows.append(
            (
                speaker,
                total_score,
                total_score / rounds_played if rounds_played else 0,
                scores_by_round,
            )
        )

    rows.sort(key=lambda row: row[1], reverse=True)

    return [
        Standing(
            rank=i + 1,
            participant=speaker,
            institution=institutions_by_id.get(speaker.institution_id),
            total_score=total_score,
            average_score=average_score,
            scores_by_round=scores_by_round,
        )
        for i, (speaker, total_score, average_score, scores_by_round) in enumerate(rows)
    ]
