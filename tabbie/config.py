from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from tabbie.algorithms import DEFAULT_ALGORITHM, get_algorithms


class Config(BaseModel):
    """Configuration data for loading a Tabbie tournament."""

    name: str = Field("tabbie-tournament", description="Name of the tournament.")
    roster_csv: Path = Field(..., description="Path to the participant roster CSV.")
    speakers_per_room: int = Field(
        7, ge=1, description="Number of speakers in every room."
    )
    judges_per_room: int = Field(
        1, ge=0, description="Number of judges on every panel."
    )
    algorithm: str = Field(
        DEFAULT_ALGORITHM, description="Speaker ordering algorithm for draws."
    )
    seed: int | None = Field(
        None, description="Optional RNG seed for reproducible draws."
    )

    @field_validator("algorithm")
    @classmethod
    def check_algorithm(cls, value: str) -> str:
        algorithms = get_algorithms()
        if value not in algorithms:
            raise ValueError(
                f"unknown algorithm {value!r} (one of {list(algorithms)} expected)"
            )
        return value

    def validate_paths(self) -> None:
        """Ensure the roster exists and is a file."""
        if not self.roster_csv.exists():
            raise FileNotFoundError(f"roster_csv does not exist: {self.roster_csv}")
        if not self.roster_csv.is_file():
            raise ValueError(f"roster_csv is not a file: {self.roster_csv}")


def resolve_config_paths(config_data: dict, config_path: Path) -> dict:
    """Resolve a relative roster path against the configuration file directory.

    Args:
        config_data: Raw configuration dictionary.
        config_path: Path to the configuration file.

    Returns:
        dict: Configuration data with resolved paths.
    """
    if not config_data or not config_path:
        return config_data or {}

    resolved_data = dict(config_data)
    value = resolved_data.get("roster_csv")
    if value and not Path(value).is_absolute():
        resolved_data["roster_csv"] = str((config_path.parent / value).resolve())
    return resolved_data
