from tabbie.participant import CheckInStatus, Role


class CheckInTracker:
    """
    Tracks who is present for the current round cycle.

    Participants the tracker has never seen are Pending.
    """

    def __init__(self):
        self.statuses = {}

    def __repr__(self):
        counts = {s: 0 for s in CheckInStatus}
        for s in self.statuses.values():
            counts[s] += 1
        return ", ".join(f"{counts[s]} {s}" for s in CheckInStatus)

    def get_status(self, participant_id: int) -> CheckInStatus:
        return self.statuses.get(participant_id, CheckInStatus.PENDING)

    def is_present(self, participant_id: int) -> bool:
        return self.get_status(participant_id) == CheckInStatus.PRESENT

    def set_status(self, participant_id: int, status):
        self.statuses[participant_id] = CheckInStatus(status)

    def set_all_pending_to_present(self):
        """Marks every Pending participant Present. Absent participants are untouched."""
        changed = [
            pid for pid, s in self.statuses.items() if s == CheckInStatus.PENDING
        ]
        for pid in changed:
            self.statuses[pid] = CheckInStatus.PRESENT
        return changed

    def reset(self, participants):
        """Starts a new cycle: every non-Admin participant goes back to Pending."""
        self.statuses = {
            p.id: CheckInStatus.PENDING for p in participants if p.role != Role.ADMIN
        }

    def present(self, participants, role: Role):
        """Returns participants of `role` that are Present, in roster order."""
        return [p for p in participants if p.role == role and self.is_present(p.id)]
