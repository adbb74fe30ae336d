from tabbie.group import Group
from tabbie.participant import CheckInStatus, Participant, Role


class RoomAssignment:
    """
    Placement of one participant in a room.

    Role and check-in status are snapshots taken when the participant was placed.
    """

    def __init__(
        self,
        participant: Participant,
        role: Role,
        check_in_status: CheckInStatus = CheckInStatus.PRESENT,
    ):
        if role not in (Role.SPEAKER, Role.JUDGE):
            raise ValueError(f"Rooms only hold speakers and judges, not {role}")
        self.participant = participant
        self.role = role
        self.check_in_status = check_in_status

    def __repr__(self):
        return f"{self.participant} ({self.role})"


class Room(Group):
    """
    Represents a room of a round: a panel of judges hearing a set of speakers.

    Attributes:
        id (int): Identifier, unique within the tournament.
        name (str): Display name, e.g. "Room 1".
        assignments (list[RoomAssignment]): Speakers and judges placed here.
    """

    def __init__(self, id: int, name: str, assignments=None):
        self.id = id
        self.name = name
        self.assignments = list(assignments or [])

    def __repr__(self):
        return f"{self.name}"

    @property
    def participants(self):
        return [a.participant for a in self.assignments]

    @property
    def speakers(self):
        return [a.participant for a in self.assignments if a.role == Role.SPEAKER]

    @property
    def judges(self):
        return [a.participant for a in self.assignments if a.role == Role.JUDGE]

    @property
    def speaker_institution_ids(self):
        return {p.institution_id for p in self.speakers}

    def add(self, participant: Participant, role: Role):
        self.assignments.append(RoomAssignment(participant, role))

    def find_assignment(self, participant_id: int):
        """Returns the assignment for `participant_id`, or None if not placed here."""
        for a in self.assignments:
            if a.participant.id == participant_id:
                return a
        return None

    def remove(self, participant_id: int):
        """Removes and returns the assignment for `participant_id`, or None."""
        assignment = self.find_assignment(participant_id)
        if assignment is not None:
            self.assignments.remove(assignment)
        return assignment

    def has_institution_conflict(self):
        """True if any judge shares an institution with a speaker in this room."""
        speaker_institutions = self.speaker_institution_ids
        return any(j.institution_id in speaker_institutions for j in self.judges)
