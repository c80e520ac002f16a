"""Scorekeeper configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from game.logic.enums import ScoringVariation
from game.session.repository import SESSION_KEY


class ScorekeeperSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREKEEPER_"}

    data_dir: str = Field(default="~/.local/share/scorekeeper", min_length=1)
    session_key: str = Field(default=SESSION_KEY, min_length=1, pattern=r"^[a-zA-Z0-9_-]+$")
    log_dir: str | None = None  # file logging is off unless set
    default_variation: ScoringVariation = ScoringVariation.FULL
