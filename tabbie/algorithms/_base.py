from abc import ABC, abstractmethod

from tabbie.utils import shuffled


class DrawGenerator(ABC):
    """
    Interface for all draw generation algorithms.

    An algorithm decides the order in which speakers fill rooms; room 1 takes the
    first chunk of that order. Judges are always shuffled and placed by
    `allocate_judges`, which every algorithm shares.
    """

    def __init__(self):
        # observers receive progress and status callbacks during generation
        self.observers = []

    @abstractmethod
    def order_speakers(self, speakers, standings, is_first_round, rng):
        """
        Return `speakers` in room-filling order.

        Args:
            speakers (list[Participant]): Checked-in speakers, in roster order.
            standings (list[Standing]): Current standings, in rank order.
            is_first_round (bool): True if no round exists yet.
            rng (random.Random): Random source for any shuffling.
        """
        raise NotImplementedError

    def order_judges(self, judges, rng):
        return shuffled(judges, rng)

    def allocate_judges(self, room, pool, judges_per_room, rng):
        """
        Draw `judges_per_room` judges for `room` out of `pool`.

        Judges are drawn uniformly at random and accepted only if their institution
        matches none of the room's speakers. Drawing stops once the attempts reach
        twice the current pool size; remaining slots are then filled from the front
        of the pool regardless of institution.

        Args:
            room (Room): Room whose speakers are already placed.
            pool (list[Participant]): Remaining judges; chosen judges are removed.
            judges_per_room (int): Panel size.
            rng (random.Random): Random source.

        Returns:
            list[Participant]: The judges chosen, in the order they were chosen.
        """
        conflicts = room.speaker_institution_ids
        chosen = []
        attempts = 0

        # the cap follows the pool, so it shrinks as judges are accepted
        while len(chosen) < judges_per_room and pool and attempts < 2 * len(pool):
            judge = pool[rng.randrange(len(pool))]
            if judge.institution_id not in conflicts:
                chosen.append(judge)
                pool.remove(judge)
            attempts += 1

        shortfall = judges_per_room - len(chosen)
        if shortfall > 0:
            fallback = pool[:shortfall]
            del pool[:shortfall]
            chosen.extend(fallback)
            self._notify(
                "judge_fallback",
                {"room": room.id, "judges": [j.id for j in fallback]},
            )

        return chosen

    def add_observer(self, observer):
        """Register a generation observer callback.

        The callback receives `(event_type, payload)`. Observers may raise an
        exception to abort generation; nothing is committed in that case.

        Args:
            observer: Callable accepting (event_type: str, payload: dict).
        """
        if not hasattr(self, "observers"):
            self.observers = []
        self.observers.append(observer)

    def _notify(self, event_type: str, payload: dict):
        """Notify observers about generation progress.

        Args:
            event_type: Short label describing the notification.
            payload: Event metadata.
        """
        for observer in getattr(self, "observers", []):
            observer(event_type, payload)
