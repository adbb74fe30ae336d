from dataclasses import dataclass

from tabbie.exceptions import NotFoundError, ParticipantNotAtSource


@dataclass(frozen=True)
class RoomLocation:
    """A room of the round being edited."""

    room_id: int

    def __str__(self):
        return f"room {self.room_id}"


class UnassignedLocation:
    """The round's unassigned pool. Use the UNASSIGNED instance."""

    def __repr__(self):
        return "UNASSIGNED"

    def __str__(self):
        return "unassigned"

    def __eq__(self, other):
        return isinstance(other, UnassignedLocation)

    def __hash__(self):
        return hash(UnassignedLocation)


UNASSIGNED = UnassignedLocation()


def parse_location(value):
    """
    Turns "unassigned" or a room id into a location.

    Args:
        value (str | int | RoomLocation | UnassignedLocation): Location to parse.
    """
    if isinstance(value, (RoomLocation, UnassignedLocation)):
        return value
    if str(value).strip().lower() == "unassigned":
        return UNASSIGNED
    return RoomLocation(int(value))


def move_participant(round, participant_id, source, destination):
    """
    Relocate one participant within `round`.

    The participant keeps the role they were placed with. Ballots are not
    touched. Moving to the location the participant is already in is a no-op.

    Args:
        round (Round): Round to edit in place.
        participant_id (int): Participant to move.
        source (RoomLocation | UnassignedLocation): Where the participant is now.
        destination (RoomLocation | UnassignedLocation): Where to put them.

    Raises:
        ParticipantNotAtSource: If the participant is not found at `source`,
            including when `source` names a room the round does not have.
        NotFoundError: If the destination room does not exist in `round`.

    Returns:
        Round: The edited round.
    """
    source_room = None
    if isinstance(source, RoomLocation):
        try:
            source_room = round.get_room(source.room_id)
        except NotFoundError:
            raise ParticipantNotAtSource(participant_id, source)
    destination_room = (
        round.get_room(destination.room_id)
        if isinstance(destination, RoomLocation)
        else None
    )

    if source_room is not None:
        found = source_room.find_assignment(participant_id) is not None
    else:
        found = round.unassigned.has_participant(participant_id)
    if not found:
        raise ParticipantNotAtSource(participant_id, source)

    if source == destination:
        return round

    if source_room is not None:
        assignment = source_room.remove(participant_id)
        participant, role = assignment.participant, assignment.role
    else:
        participant, role = round.unassigned.remove(participant_id)

    if destination_room is not None:
        destination_room.add(participant, role)
    else:
        round.unassigned.add(participant, role)

    return round
