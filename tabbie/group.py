from tabbie.exceptions import NotFoundError


class Group:
    """
    A base class representing a collection of participants.
    Provides methods for querying and filtering based on roles and attributes.

    Subclasses supply the `participants` sequence.
    """

    participants = ()

    def get_participants_by_attribute(self, attribute, value=True):
        """
        Returns all participants with a specific attribute value.

        Args:
            attribute (str): The attribute to check.
            value (any): The expected value of the attribute.

        Returns:
            tuple: Matching participants.
        """
        return tuple(
            p for p in self.participants if getattr(p, attribute, None) == value
        )

    def get_participant_by_id(self, id):
        """
        Returns the participant with the specified ID.

        Raises:
            NotFoundError if no participant with the given ID is found.
        """
        for p in self.participants:
            if p.id == id:
                return p
        raise NotFoundError(f"Participant ID {id} not found")

    def has_participant(self, id):
        return any(p.id == id for p in self.participants)
