from tabbie.algorithms import DEFAULT_ALGORITHM, get_generator
from tabbie.ballot import Ballot
from tabbie.exceptions import (
    DuplicateRoundName,
    InsufficientJudges,
    NoEligibleSpeakers,
    ValidationError,
)
from tabbie.participant import Role
from tabbie.room import Room
from tabbie.round import Round, UnassignedPool
from tabbie.utils import chunk

ROOM_ID_STRIDE = 100


def room_id(round_id: int, index: int) -> int:
    """Room ids are unique across the tournament: round 2, room 3 is 203."""
    return round_id * ROOM_ID_STRIDE + index


def check_draw(tournament, round_name, speakers_per_room, judges_per_room):
    """
    Validate a draw request against the current state. First failure wins.

    Returns:
        tuple[list, list, int]: Eligible speakers, eligible judges, number of rooms.

    Raises:
        ValidationError: If the round name is taken or room sizes are not usable.
        CapacityError: If too few speakers or judges are checked in.
    """
    if any(r.name == round_name for r in tournament.rounds):
        raise DuplicateRoundName(round_name)
    if speakers_per_room < 1:
        raise ValidationError("Speakers per room must be at least 1.")
    if judges_per_room < 0:
        raise ValidationError("Judges per room cannot be negative.")

    participants = tournament.roster.participants
    speakers = tournament.check_ins.present(participants, Role.SPEAKER)
    judges = tournament.check_ins.present(participants, Role.JUDGE)

    if not speakers:
        raise NoEligibleSpeakers()

    number_of_rooms = len(speakers) // speakers_per_room
    needed = number_of_rooms * judges_per_room
    if len(judges) < needed:
        raise InsufficientJudges(needed=needed, available=len(judges))

    return speakers, judges, number_of_rooms


def generate_draw(
    tournament,
    round_name,
    speakers_per_room,
    judges_per_room,
    algorithm=DEFAULT_ALGORITHM,
    is_silent=False,
    observer=None,
):
    """
    Build the next round and commit it to `tournament`.

    Everything is validated and built before the tournament is touched, so a
    failure leaves no round, room, or ballot behind.

    Args:
        tournament (Tournament): State to read from and commit to.
        round_name (str): Unique name of the new round.
        speakers_per_room (int): Exact number of speakers in every room.
        judges_per_room (int): Number of judges on every panel.
        algorithm (str): Registered speaker-ordering algorithm.
        is_silent (bool): Whether the round's results are withheld.
        observer: Optional callback for generation progress updates.

    Returns:
        Round: The new live round.
    """
    generator = get_generator(algorithm)()
    if observer:
        generator.add_observer(observer)

    speakers, judges, number_of_rooms = check_draw(
        tournament, round_name, speakers_per_room, judges_per_room
    )
    rng = tournament.rng
    round_id = len(tournament.rounds) + 1
    generator._notify(
        "start",
        {"round": round_id, "speakers": len(speakers), "judges": len(judges)},
    )

    ordered_speakers = generator.order_speakers(
        speakers,
        tournament.standings,
        is_first_round=not tournament.rounds,
        rng=rng,
    )
    judge_pool = generator.order_judges(judges, rng)

    chunks, leftover_speakers = chunk(ordered_speakers, speakers_per_room)
    next_ballot_id = len(tournament.ballots) + 1
    rooms = []
    ballots = []
    for index, room_speakers in enumerate(chunks, start=1):
        room = Room(room_id(round_id, index), f"Room {index}")
        for speaker in room_speakers:
            room.add(speaker, Role.SPEAKER)

        for judge in generator.allocate_judges(room, judge_pool, judges_per_room, rng):
            room.add(judge, Role.JUDGE)
            ballots.append(Ballot(next_ballot_id, round_id, room.id, judge, room_speakers))
            next_ballot_id += 1

        rooms.append(room)
        generator._notify(
            "room_filled",
            {"room": room.id, "speakers": len(room.speakers), "judges": len(room.judges)},
        )

    new_round = Round(
        id=round_id,
        name=round_name,
        rooms=rooms,
        unassigned=UnassignedPool(speakers=leftover_speakers, judges=judge_pool),
        is_live=True,
        is_silent=is_silent,
    )

    generator._notify("accepted", {"round": round_id, "rooms": len(rooms)})

    # commit
    for r in tournament.rounds:
        r.is_live = False
    tournament.rounds.append(new_round)
    tournament.ballots.extend(ballots)
    tournament.check_ins.reset(tournament.roster.participants)

    return new_round
