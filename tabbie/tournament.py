import random
import threading

from tabbie import draw, editor
from tabbie.algorithms import DEFAULT_ALGORITHM
from tabbie.checkin import CheckInTracker
from tabbie.exceptions import NotFoundError
from tabbie.participant import CheckInStatus, Role
from tabbie.roster import Roster
from tabbie.standings import compute_standings


class Tournament:
    """
    The tournament state aggregate: roster, check-ins, rounds, and ballots.

    Every operation runs under one re-entrant lock, so a draw generation is never
    interleaved with a move or a ballot submission.
    """

    def __init__(
        self,
        name: str = "tabbie-tournament",
        speakers_per_room: int = 7,
        judges_per_room: int = 1,
        algorithm: str = DEFAULT_ALGORITHM,
        seed: int | None = None,
        verbose: bool = False,
    ):
        self.name = name
        self.speakers_per_room = speakers_per_room
        self.judges_per_room = judges_per_room
        self.algorithm = algorithm
        self.verbose = verbose
        self.rng = random.Random(seed)
        self.lock = threading.RLock()

        self.roster = Roster()
        self.check_ins = CheckInTracker()
        self.rounds = []
        self.ballots = []

    def __repr__(self):
        return f"{self.name}"

    # =========================================================================
    # roster and check-in

    @property
    def participants(self):
        return self.roster.participants

    @property
    def institutions(self):
        return self.roster.institutions

    def get_participant(self, participant_id: int):
        return self.roster.get_participant_by_id(participant_id)

    def find_participant_by_email(self, email: str):
        return self.roster.find_participant_by_email(email)

    def load_participants(self, roster_csv):
        """
        Loads participants from a roster CSV. New participants start Pending.

        Returns:
            list[Participant]: Newly registered participants.
        """
        with self.lock:
            added = self.roster.load_csv(roster_csv)
            self._register_check_ins(added)
        if self.verbose:
            print(f"\n  Loaded {len(added)} participants from {roster_csv}")
        return added

    def load_rows(self, rows):
        with self.lock:
            added = self.roster.load_rows(rows)
            self._register_check_ins(added)
        return added

    def add_participant(self, name, email, role, institution_name, country=""):
        with self.lock:
            participant = self.roster.add_participant(
                name, email, role, institution_name, country
            )
            self._register_check_ins([participant])
        if self.verbose:
            print(f"  {participant} has been added successfully.")
        return participant

    def _register_check_ins(self, participants):
        for p in participants:
            if p.role != Role.ADMIN:
                self.check_ins.set_status(p.id, CheckInStatus.PENDING)

    def set_status(self, participant_id: int, status):
        """Sets a participant's check-in status for the current cycle."""
        with self.lock:
            participant = self.get_participant(participant_id)
            self.check_ins.set_status(participant.id, status)
        if self.verbose:
            print(f"    {participant.name} checked in as {CheckInStatus(status)}")

    def set_all_pending_to_present(self):
        with self.lock:
            changed = self.check_ins.set_all_pending_to_present()
        if self.verbose:
            print(f"\n  {len(changed)} pending participants marked present")
        return changed

    # =========================================================================
    # draw

    @property
    def live_round(self):
        """Returns the most recently generated round, or None before the first draw."""
        return self.rounds[-1] if self.rounds else None

    def get_round(self, round_id: int):
        for r in self.rounds:
            if r.id == round_id:
                return r
        raise NotFoundError(f"Round ID {round_id} not found")

    def generate_draw(
        self,
        round_name: str,
        speakers_per_room: int | None = None,
        judges_per_room: int | None = None,
        algorithm: str | None = None,
        is_silent: bool = False,
        observer=None,
    ):
        """
        Generates the next round. Room sizes and algorithm default to the tournament's.

        Returns:
            Round: The new live round.
        """
        with self.lock:
            new_round = draw.generate_draw(
                self,
                round_name,
                self.speakers_per_room if speakers_per_room is None else speakers_per_room,
                self.judges_per_room if judges_per_room is None else judges_per_room,
                algorithm=algorithm or self.algorithm,
                is_silent=is_silent,
                observer=observer,
            )
        if self.verbose:
            print(f"\n  Successfully generated draw for {round_name}.")
            self.print_draw(new_round)
        return new_round

    def move_participant(self, participant_id: int, source, destination):
        """
        Moves a participant within the live round.

        Args:
            participant_id (int): Participant to move.
            source: RoomLocation, UNASSIGNED, a room id, or "unassigned".
            destination: Same forms as `source`.

        Returns:
            Round: The edited live round.
        """
        source = editor.parse_location(source)
        destination = editor.parse_location(destination)
        with self.lock:
            if self.live_round is None:
                raise NotFoundError("No round has been generated yet")
            edited = editor.move_participant(
                self.live_round, participant_id, source, destination
            )
        if self.verbose:
            participant = self.get_participant(participant_id)
            print(f"    {participant.name} moved from {source} to {destination}")
        return edited

    # =========================================================================
    # ballots and standings

    def get_ballot(self, ballot_id: int):
        for b in self.ballots:
            if b.id == ballot_id:
                return b
        raise NotFoundError(f"Ballot ID {ballot_id} not found")

    def get_ballots(self, round_id: int | None = None):
        with self.lock:
            return [b for b in self.ballots if round_id is None or b.round_id == round_id]

    def get_ballot_for_judge(self, judge_id: int, round_id: int):
        """Returns the judge's ballot for the round, or None."""
        with self.lock:
            for b in self.ballots:
                if b.judge.id == judge_id and b.round_id == round_id:
                    return b
        return None

    def submit_ballot(self, ballot_id: int, scores: dict):
        """
        Validates and commits a ballot for the first time.

        Args:
            ballot_id (int): Ballot to submit.
            scores (dict[int, tuple[float, int]]): Speaker id to (score, rank).
        """
        with self.lock:
            ballot = self.get_ballot(ballot_id)
            ballot.submit(scores)
        if self.verbose:
            print(f"    {ballot} submitted")
        return ballot

    def overwrite_ballot(self, ballot_id: int, scores: dict):
        """Replaces the scores of a ballot that was already submitted."""
        with self.lock:
            ballot = self.get_ballot(ballot_id)
            ballot.overwrite(scores)
        if self.verbose:
            print(f"    {ballot} overwritten")
        return ballot

    @property
    def standings(self):
        with self.lock:
            return compute_standings(
                list(self.participants),
                list(self.institutions),
                list(self.ballots),
                list(self.rounds),
            )

    def stale_ballots(self, round_id: int):
        """
        Ballots whose judge no longer sits in the ballot's room.

        Moving a judge after the draw leaves their ballot in place; these are the
        ballots that disagree with the room they belong to.
        """
        with self.lock:
            r = self.get_round(round_id)
            rooms = {room.id: room for room in r.rooms}
            return [
                b
                for b in self.get_ballots(round_id)
                if b.room_id not in rooms
                or not any(j.id == b.judge.id for j in rooms[b.room_id].judges)
            ]

    # =========================================================================
    # checks and console output

    def validate(self):
        """
        Runs structural checks over every round and prints a report.

        Returns:
            bool: True if no check failed. Stale ballots and judge conflicts are
            reported as warnings and do not fail validation.
        """
        with self.lock:
            print(
                f"\n  =============================================================================="
            )
            print(f"\n  [Tournament validation checks]")

            is_valid = True

            live = [r for r in self.rounds if r.is_live]
            if self.rounds and (len(live) != 1 or live[0] is not self.live_round):
                print(f"\n    Live round violation: {live} (expected {self.live_round})")
                is_valid = False

            for r in self.rounds:
                header = f"{r} ({len(r.rooms)} rooms, {len(r.unassigned.speakers)} unassigned speakers, {len(r.unassigned.judges)} unassigned judges)"
                print(f"\n  {header}")
                print(f"  {'-' * len(header)}\n")

                counts = r.participant_counts()
                if counts != r.created_with:
                    print(f"    {r} violation: participants differ from the generated draw")
                    is_valid = False
                for (participant_id, role), count in counts.items():
                    if count > 1:
                        print(
                            f"    {r} violation: participant {participant_id} placed {count} times as {role}"
                        )
                        is_valid = False

                for room in r.rooms:
                    if room.has_institution_conflict():
                        print(f"    {room} warning: judge shares an institution with a speaker")

                for b in self.stale_ballots(r.id):
                    print(f"    {b} warning: {b.judge} no longer judges room {b.room_id}")

            if is_valid:
                print(f"\n    All checks passed.")

            return is_valid

    def print_draw(self, r=None):
        r = r or self.live_round
        if r is None:
            print("\n  No rounds generated yet.")
            return

        flags = [f for f, on in (("live", r.is_live), ("silent", r.is_silent)) if on]
        header = f"{r}" + (f" ({', '.join(flags)})" if flags else "")
        print(f"\n  {header}")
        print(f"  {'-' * len(header)}")
        for room in r.rooms:
            print(f"\n    {room} [{room.id}]")
            print(f"      Speakers: {', '.join(p.name for p in room.speakers)}")
            print(f"      Judges:   {', '.join(p.name for p in room.judges)}")
        print(f"\n    Unassigned speakers: {r.unassigned.speakers}")
        print(f"    Unassigned judges:   {r.unassigned.judges}")

    def print_standings(self):
        standings = self.standings
        header = "Standings"
        print(f"\n  {header}")
        print(f"  {'-' * len(header)}\n")
        if not standings:
            print("    No speakers registered.")
            return
        width = max(len(s.participant.name) for s in standings)
        for s in standings:
            institution = s.institution.name if s.institution else ""
            print(
                f"  {str(s.rank).rjust(4)}  {s.participant.name.ljust(width)}  "
                f"{institution.ljust(20)}  total {s.total_score:7.2f}  avg {s.average_score:6.2f}"
            )
