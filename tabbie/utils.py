MIN_SCORE = 0  # exclusive
MAX_SCORE = 100


def competition_ranks(scores):
    """
    Ranks scores from highest to lowest, giving tied scores the same rank.

    The rank of a score is 1 + the number of strictly greater scores, so the
    rank after a tie skips ahead: [90, 90, 70] ranks as [1, 1, 3].

    Args:
        scores (list[float]): Scores in any order.

    Returns:
        list[int]: Rank of each score, aligned with the input.
    """
    return [1 + sum(1 for other in scores if other > score) for score in scores]


def shuffled(items, rng):
    """Returns a new list holding `items` in a uniformly random order drawn from `rng`."""
    result = list(items)
    rng.shuffle(result)
    return result


def chunk(items, size):
    """
    Splits `items` into consecutive full chunks of `size`.

    Returns:
        tuple[list[list], list]: The full chunks, and the leftover tail.
    """
    count = len(items) // size
    chunks = [list(items[i * size : (i + 1) * size]) for i in range(count)]
    return chunks, list(items[count * size :])
