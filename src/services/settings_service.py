"""Application settings loaded from environment variables and .env."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from src.utils.env_utils import read_env_file

ENV_KEYS = (
    "RACE_SUBMISSION_DELAY",
    "RACE_CHECKOUT_FILE",
    "RACE_CURRENCY",
    "RACE_LOG_LEVEL",
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the registration app."""

    submission_delay: float = 1.5
    checkout_file: str = "data/checkout.json"
    currency: str = "MVR"
    log_level: str = "INFO"


def _environment(env_path: Path) -> Dict[str, str]:
    # Real environment variables take precedence over the .env file
    values = read_env_file(env_path, ENV_KEYS)
    values.update({key: os.environ[key] for key in ENV_KEYS if key in os.environ})
    return values


def get_settings(env_path: Path = Path(".env")) -> Settings:
    """
    Build settings from the environment and an optional .env file.

    Returns:
        Settings with defaults for anything unset

    Raises:
        ValueError: If RACE_SUBMISSION_DELAY is not a non-negative number
    """
    env = _environment(env_path)

    defaults = Settings()
    raw_delay = env.get("RACE_SUBMISSION_DELAY")
    delay = defaults.submission_delay
    if raw_delay:
        try:
            delay = float(raw_delay)
        except ValueError as e:
            raise ValueError(f"RACE_SUBMISSION_DELAY must be a number: {raw_delay}") from e
        if delay < 0:
            raise ValueError("RACE_SUBMISSION_DELAY cannot be negative")

    return Settings(
        submission_delay=delay,
        checkout_file=env.get("RACE_CHECKOUT_FILE", defaults.checkout_file),
        currency=env.get("RACE_CURRENCY", defaults.currency),
        log_level=env.get("RACE_LOG_LEVEL", defaults.log_level).upper(),
    )
