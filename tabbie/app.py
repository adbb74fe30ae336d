from tabbie.algorithms import DEFAULT_ALGORITHM
from tabbie.tournament import Tournament


def main(tournament, round_name, observer=None, check_in_all=False):
    """Generate the next round's draw and run the tournament's validation checks.

    Args:
        tournament: Tournament instance to mutate.
        round_name: Name of the round to generate.
        observer: Optional callback for draw generation progress updates.
        check_in_all: Mark every pending participant present before drawing.

    Returns:
        Round: The generated round.
    """
    if check_in_all:
        tournament.set_all_pending_to_present()

    new_round = tournament.generate_draw(round_name, observer=observer)

    # run checks
    if not tournament.validate():
        raise ValueError(
            f"Invalid draw for {round_name}. See console output for details."
        )

    return new_round


def load_tournament(
    name,
    roster_csv,
    speakers_per_room,
    judges_per_room,
    algorithm=DEFAULT_ALGORITHM,
    seed: int | None = None,
    verbose: bool = True,
):
    """Build a Tournament from a roster with optional deterministic seeding.

    Args:
        name: Tournament name.
        roster_csv: Path to the participant roster CSV.
        speakers_per_room: Number of speakers in every room.
        judges_per_room: Number of judges on every panel.
        algorithm: Speaker ordering algorithm for draws.
        seed: Optional RNG seed for deterministic draws.
        verbose: Print progress to the console.

    Returns:
        Tournament: The initialized tournament, roster loaded, everyone Pending.
    """
    tournament = Tournament(
        name=name,
        speakers_per_room=speakers_per_room,
        judges_per_room=judges_per_room,
        algorithm=algorithm,
        seed=seed,
        verbose=verbose,
    )
    tournament.load_participants(roster_csv)
    return tournament
