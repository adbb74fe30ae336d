from tabbie.algorithms import DrawGenerator, register
from tabbie.utils import shuffled


@register
class Randomizer(DrawGenerator):
    """Randomly assign speakers to rooms every round, ignoring the standings."""

    def order_speakers(self, speakers, standings, is_first_round, rng):
        return shuffled(speakers, rng)
