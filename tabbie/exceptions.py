class TabbieError(Exception):
    """Base class for every error raised by the tabulation engine."""


class ValidationError(TabbieError, ValueError):
    """Input was malformed or violates a contract. Nothing was changed."""


class CapacityError(TabbieError, ValueError):
    """Not enough checked-in participants to build a draw."""


class NotFoundError(TabbieError, LookupError):
    """A participant, room, ballot, or round id does not exist."""


class DuplicateRoundName(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Round "{name}" already exists.')


class DuplicateEmail(ValidationError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A participant with email {email} already exists.")


class BallotValidationError(ValidationError):
    """A ballot's scores or ranks are out of contract."""


class BallotAlreadySubmitted(ValidationError):
    def __init__(self, ballot_id: int):
        self.ballot_id = ballot_id
        super().__init__(
            f"Ballot {ballot_id} has already been submitted; overwrite it instead."
        )


class BallotNotSubmitted(ValidationError):
    def __init__(self, ballot_id: int):
        self.ballot_id = ballot_id
        super().__init__(
            f"Ballot {ballot_id} has not been submitted yet; nothing to overwrite."
        )


class NoEligibleSpeakers(CapacityError):
    def __init__(self):
        super().__init__("No checked-in speakers available to generate a draw.")


class InsufficientJudges(CapacityError):
    def __init__(self, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(
            f"Not enough checked-in judges. Need {needed}, but only have {available}."
        )


class ParticipantNotAtSource(NotFoundError):
    def __init__(self, participant_id: int, source):
        self.participant_id = participant_id
        self.source = source
        super().__init__(f"Participant ID {participant_id} not found in {source}")
