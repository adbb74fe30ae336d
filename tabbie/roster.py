import csv

from tabbie.exceptions import DuplicateEmail, NotFoundError
from tabbie.group import Group
from tabbie.participant import Institution, Participant, Role

ADMIN_INSTITUTION = Institution(id=0, name="Admins", country="N/A")
ADMIN = Participant(
    id=0,
    name="Tab Director",
    email="admin@tabbie.com",
    role=Role.ADMIN,
    institution_id=ADMIN_INSTITUTION.id,
)

ROSTER_FIELDS = ("name", "email", "role", "institution", "country")


def parse_role(role_string: str) -> Role:
    """Judges are marked explicitly; everyone else registers as a speaker."""
    return Role.JUDGE if str(role_string).strip().lower() == "judge" else Role.SPEAKER


class Roster(Group):
    """
    Holds the tournament's participants and institutions.

    The tab director (Admin) is always present as participant 0.
    """

    def __init__(self):
        self.participants = [ADMIN]
        self.institutions = [ADMIN_INSTITUTION]

    def __repr__(self):
        return f"Roster ({len(self.participants)} participants)"

    @property
    def speakers(self):
        return list(self.get_participants_by_attribute("role", Role.SPEAKER))

    @property
    def judges(self):
        return list(self.get_participants_by_attribute("role", Role.JUDGE))

    def find_participant_by_email(self, email: str):
        """Case-insensitive lookup. Returns None if nobody uses `email`."""
        email = email.strip().lower()
        for p in self.participants:
            if p.email.lower() == email:
                return p
        return None

    def get_institution(self, institution_id: int):
        for i in self.institutions:
            if i.id == institution_id:
                return i
        raise NotFoundError(f"Institution ID {institution_id} not found")

    def get_or_create_institution(self, name: str, country: str = ""):
        """
        Returns the institution called `name`, creating it on first sight.

        Names match case-insensitively; the first spelling seen is kept.
        """
        for i in self.institutions:
            if i.name.lower() == name.strip().lower():
                return i
        institution = Institution(
            id=max(i.id for i in self.institutions) + 1,
            name=name.strip(),
            country=country.strip() if country else "N/A",
        )
        self.institutions.append(institution)
        return institution

    def add_participant(self, name, email, role, institution_name, country=""):
        """
        Registers a single participant.

        Raises:
            DuplicateEmail: If the email is already registered.

        Returns:
            Participant: The new participant.
        """
        if self.find_participant_by_email(email) is not None:
            raise DuplicateEmail(email)

        institution = self.get_or_create_institution(institution_name, country)
        participant = Participant(
            id=max(p.id for p in self.participants) + 1,
            name=name.strip(),
            email=email.strip(),
            role=Role(role),
            institution_id=institution.id,
        )
        self.participants.append(participant)
        return participant

    def load_rows(self, rows):
        """
        Registers participants from roster records.

        Records missing a name, email, role, or institution are skipped, as are
        emails that are already registered.

        Args:
            rows (Iterable[dict]): Mappings with the keys in ROSTER_FIELDS.

        Returns:
            list[Participant]: Newly registered participants.
        """
        added = []
        for row in rows:
            name, email, role, institution, country = (
                (row.get(field) or "").strip() for field in ROSTER_FIELDS
            )
            if not (name and email and role and institution):
                continue
            if self.find_participant_by_email(email) is not None:
                continue
            added.append(
                self.add_participant(name, email, parse_role(role), institution, country)
            )
        return added

    def load_csv(self, roster_csv):
        """
        Loads participants from a roster CSV with the columns in ROSTER_FIELDS.

        Header names are matched case-insensitively; extra columns are ignored.

        Returns:
            list[Participant]: Newly registered participants.
        """
        with open(roster_csv, newline="", encoding="utf-8-sig") as file:
            reader = csv.DictReader(file)
            rows = [
                {str(k).strip().lower(): v for k, v in row.items() if k}
                for row in reader
            ]
        return self.load_rows(rows)
