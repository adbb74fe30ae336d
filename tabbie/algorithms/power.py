from tabbie.algorithms import DrawGenerator, register
from tabbie.utils import shuffled


@register
class PowerPairing(DrawGenerator):
    """
    Random first round, then rooms filled in standings order so the best
    speakers face each other.
    """

    def order_speakers(self, speakers, standings, is_first_round, rng):
        if is_first_round:
            return shuffled(speakers, rng)

        present = {p.id: p for p in speakers}

        # speakers with no submitted score yet carry no ranking signal
        ranked = [
            s.participant
            for s in standings
            if s.scores_by_round and s.participant.id in present
        ]
        ranked_ids = {p.id for p in ranked}
        unranked = [p for p in speakers if p.id not in ranked_ids]

        return ranked + shuffled(unranked, rng)
