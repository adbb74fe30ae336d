from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    JUDGE = "Judge"
    SPEAKER = "Speaker"

    def __str__(self):
        return self.value


class CheckInStatus(str, Enum):
    PENDING = "Pending"
    PRESENT = "Present"
    ABSENT = "Absent"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Institution:
    """
    A school or society that participants represent.

    Only used as a conflict key: a judge should not adjudicate a room that holds
    a speaker from their own institution.
    """

    id: int
    name: str
    country: str = "N/A"

    def __repr__(self):
        return f"{self.name}"


@dataclass(frozen=True)
class Participant:
    """
    Represents a single person registered for the tournament.

    Participants are immutable and shared by reference across rounds, rooms,
    ballots and standings.

    Attributes:
        id (int): Unique, stable identifier.
        name (str): Display name.
        email (str): Contact address, unique case-insensitively.
        role (Role): Admin, Judge, or Speaker.
        institution_id (int): Id of the participant's Institution.
    """

    id: int
    name: str
    email: str
    role: Role
    institution_id: int

    def __repr__(self):
        return f"{self.name}"
