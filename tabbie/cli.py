import click
import math
import questionary
import yaml

from pathlib import Path
from pydantic import ValidationError

from tabbie.algorithms import get_algorithms
from tabbie.app import load_tournament, main
from tabbie.config import Config, resolve_config_paths
from tabbie.exceptions import TabbieError
from tabbie.participant import CheckInStatus, Role


def load_config(ctx, param, value: Path) -> Config:
    if value is None:
        return None
    try:
        with open(value, "r") as f:
            data = yaml.safe_load(f)
        config = Config(**resolve_config_paths(data, value))
        config.validate_paths()
        return config
    except (ValidationError, FileNotFoundError, ValueError) as e:
        raise click.BadParameter(f"Invalid config: {e}")
    except (OSError, yaml.YAMLError, TypeError) as e:
        raise click.BadParameter(f"Failed to load config: {e}")


@click.command(context_settings={"max_content_width": 120})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=load_config,
    required=True,
    help="Path to tournament configuration file.",
)
@click.option(
    "--algorithm",
    type=click.Choice(list(get_algorithms().keys())),
    default=None,
    help="Speaker ordering algorithm; overrides the config file.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Optional RNG seed for deterministic draws; overrides the config file.",
)
@click.option(
    "--round",
    "round_names",
    multiple=True,
    help="Round to generate straight away, checking everyone in first. Repeatable.",
)
@click.option(
    "--interactive",
    type=click.BOOL,
    default=True,
    help="Start an interactive session after loading.",
)
def cli(
    config: Config,
    algorithm: str | None,
    seed: int | None,
    round_names: tuple[str, ...],
    interactive: bool,
):
    """Tabulate a debate tournament from a roster CSV."""

    tournament = load_tournament(
        name=config.name,
        roster_csv=config.roster_csv,
        speakers_per_room=config.speakers_per_room,
        judges_per_room=config.judges_per_room,
        algorithm=algorithm or config.algorithm,
        seed=seed if seed is not None else config.seed,
    )

    print(f"\nTournament loaded: {tournament.name}")

    try:
        for round_name in round_names:
            main(tournament, round_name, check_in_all=True)
    except (TabbieError, ValueError) as e:
        print(f"\n  {e}\n")
        raise SystemExit(1)

    if interactive:
        session(tournament)


def _ask(question):
    """Return a questionary answer, stopping the session on Ctrl-C."""
    answer = question.ask()
    if answer is None:
        raise KeyboardInterrupt
    return answer


def _is_number(value: str) -> bool:
    """True for finite numbers only; "nan" and "inf" parse as floats but are not scores."""
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


def _choose_participant(prompt, participants):
    labels = {f"{p.name} <{p.email}> [{p.id}]": p for p in participants}
    label = _ask(
        questionary.autocomplete(
            prompt, choices=list(labels), qmark="", ignore_case=True
        )
    )
    if label not in labels:
        raise TabbieError(f"No participant matches {label!r}")
    return labels[label]


def _location_choices(r):
    return ["unassigned"] + [f"{room.id}: {room.name}" for room in r.rooms]


def _parse_location_choice(choice: str):
    return choice.split(":", 1)[0]


def _ask_scores(ballot):
    scores = {}
    for record in ballot.scores:
        score = _ask(
            questionary.text(
                f"\nScore for {record.speaker.name} (/100):",
                qmark="",
                validate=_is_number,
            )
        )
        rank = _ask(
            questionary.text(
                f"Rank for {record.speaker.name}:",
                qmark="",
                validate=lambda val: val.isdigit(),
            )
        )
        scores[record.speaker.id] = (float(score), int(rank))
    return scores


def session(tournament):
    """Run the interactive tab room loop until the operator quits."""

    choices = [
        "Check in a participant",
        "Check in all pending participants",
        "Generate a draw",
        "Move a participant",
        "Submit a ballot",
        "Overwrite a ballot",
        "Show the draw",
        "Show standings",
        "Run validation checks",
        "Quit",
    ]

    while True:

        print(f"\n---")

        try:
            choice = _ask(
                questionary.select(
                    "\nAction:", choices=choices, qmark="", instruction=" "
                )
            )
        except KeyboardInterrupt:
            choice = "Quit"

        try:
            if choice == "Check in a participant":
                participant = _choose_participant(
                    "\nParticipant:",
                    [p for p in tournament.participants if p.role != Role.ADMIN],
                )
                status = _ask(
                    questionary.select(
                        "\nStatus:",
                        choices=[s.value for s in CheckInStatus],
                        qmark="",
                        instruction=" ",
                    )
                )
                print()
                tournament.set_status(participant.id, status)

            if choice == "Check in all pending participants":
                tournament.set_all_pending_to_present()

            if choice == "Generate a draw":
                round_name = _ask(questionary.text("\nRound name:", qmark=""))
                speakers_per_room = _ask(
                    questionary.text(
                        "\nSpeakers per room:",
                        default=str(tournament.speakers_per_room),
                        qmark="",
                        validate=lambda val: val.isdigit(),
                    )
                )
                judges_per_room = _ask(
                    questionary.text(
                        "\nJudges per room:",
                        default=str(tournament.judges_per_room),
                        qmark="",
                        validate=lambda val: val.isdigit(),
                    )
                )
                is_silent = _ask(
                    questionary.confirm("\nSilent round?", default=False, qmark="")
                )
                tournament.generate_draw(
                    round_name,
                    speakers_per_room=int(speakers_per_room),
                    judges_per_room=int(judges_per_room),
                    is_silent=is_silent,
                )

            if choice == "Move a participant":
                r = tournament.live_round
                if r is None:
                    raise TabbieError("No round has been generated yet.")
                participant = _choose_participant("\nParticipant:", r.participants)
                source = _ask(
                    questionary.select(
                        "\nFrom:", choices=_location_choices(r), qmark="", instruction=" "
                    )
                )
                destination = _ask(
                    questionary.select(
                        "\nTo:", choices=_location_choices(r), qmark="", instruction=" "
                    )
                )
                print()
                tournament.move_participant(
                    participant.id,
                    _parse_location_choice(source),
                    _parse_location_choice(destination),
                )

            if choice in ("Submit a ballot", "Overwrite a ballot"):
                overwrite = choice == "Overwrite a ballot"
                r = tournament.live_round
                if r is None:
                    raise TabbieError("No round has been generated yet.")
                ballots = {
                    f"{b.id}: {b.judge.name} (room {b.room_id})": b
                    for b in tournament.get_ballots(r.id)
                    if b.submitted == overwrite
                }
                if not ballots:
                    print("\n  No ballots available.")
                    continue
                label = _ask(
                    questionary.select(
                        "\nBallot:", choices=list(ballots), qmark="", instruction=" "
                    )
                )
                ballot = ballots[label]
                scores = _ask_scores(ballot)
                print()
                if overwrite:
                    tournament.overwrite_ballot(ballot.id, scores)
                else:
                    tournament.submit_ballot(ballot.id, scores)

            if choice == "Show the draw":
                tournament.print_draw()

            if choice == "Show standings":
                tournament.print_standings()

            if choice == "Run validation checks":
                tournament.validate()

            if choice == "Quit":
                print(f"\nProgram terminated.\n")
                return

        except KeyboardInterrupt:
            print("\n  Cancelled.")
        except TabbieError as e:
            print(f"\n  {e}")


if __name__ == "__main__":
    cli()
