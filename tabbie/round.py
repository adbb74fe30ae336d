from collections import Counter

from tabbie.exceptions import NotFoundError
from tabbie.group import Group
from tabbie.participant import Role


class UnassignedPool(Group):
    """Speakers and judges in a round that were not placed in any room."""

    def __init__(self, speakers=None, judges=None):
        self.speakers = list(speakers or [])
        self.judges = list(judges or [])

    def __repr__(self):
        return "Unassigned"

    @property
    def participants(self):
        return self.speakers + self.judges

    def remove(self, participant_id: int):
        """
        Removes a participant from the pool.

        Speakers are searched before judges.

        Returns:
            tuple[Participant, Role] or None: The removed participant and the list it came from.
        """
        for members, role in ((self.speakers, Role.SPEAKER), (self.judges, Role.JUDGE)):
            for p in members:
                if p.id == participant_id:
                    members.remove(p)
                    return p, role
        return None

    def add(self, participant, role: Role):
        if role == Role.SPEAKER:
            self.speakers.append(participant)
        else:
            self.judges.append(participant)


class Round(Group):
    """
    Represents one round of the tournament: its rooms and its unassigned pool.

    Attributes:
        id (int): Sequential round identifier, starting at 1.
        name (str): Unique round name.
        is_live (bool): True only for the most recently generated round.
        is_silent (bool): True if results of this round are not announced.
        rooms (list[Room]): Rooms in draw order; room 1 is the top room.
        unassigned (UnassignedPool): Participants left out of every room.
    """

    def __init__(
        self,
        id: int,
        name: str,
        rooms=None,
        unassigned: UnassignedPool = None,
        is_live: bool = True,
        is_silent: bool = False,
    ):
        self.id = id
        self.name = name
        self.rooms = list(rooms or [])
        self.unassigned = unassigned if unassigned is not None else UnassignedPool()
        self.is_live = is_live
        self.is_silent = is_silent
        # closed world: edits may relocate these participants, never add or drop them
        self.created_with = self.participant_counts()

    def __repr__(self):
        return f"{self.name}"

    @property
    def participants(self):
        return sum([r.participants for r in self.rooms], []) + self.unassigned.participants

    def participant_counts(self):
        """
        Counts participant ids per role across rooms and the unassigned pool.

        Returns:
            Counter: Keyed by (participant_id, role).
        """
        counts = Counter()
        for room in self.rooms:
            for a in room.assignments:
                counts[(a.participant.id, a.role)] += 1
        for p in self.unassigned.speakers:
            counts[(p.id, Role.SPEAKER)] += 1
        for p in self.unassigned.judges:
            counts[(p.id, Role.JUDGE)] += 1
        return counts

    def get_room(self, room_id: int):
        for room in self.rooms:
            if room.id == room_id:
                return room
        raise NotFoundError(f"Room ID {room_id} not found in {self}")
