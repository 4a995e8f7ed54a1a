"""
Application settings.

Defaults can be overridden with environment variables (CHESS_HUMAN_COLOR, CHESS_AI_THINK_SECONDS, CHESS_SEED,
CHESS_LOG_LEVEL, CHESS_LOG_FILE), and those again by command line options.
"""

from pathlib import Path
from typing import Optional, Self

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.chess.pieces import Color
from src.core.exceptions import InvalidRequestError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHESS_")

    human_color: Color = Color.WHITE
    # pause before the computer plays, so a human can follow along
    ai_think_seconds: float = Field(default=1.0, ge=0)
    seed: Optional[int] = None
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @field_validator("human_color", mode="before")
    @classmethod
    def parse_color(cls, value: object) -> object:
        """Accept color names ('white' / 'black') next to Color members."""
        if isinstance(value, str):
            if value.upper() not in Color.__members__:
                raise InvalidRequestError(
                    f"Color {value!r} not in {', '.join(c.name.lower() for c in Color)}."
                )
            return Color[value.upper()]
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        if value.upper() not in LOG_LEVELS:
            raise InvalidRequestError(
                f"Unknown log level {value!r}. Pick one from {', '.join(LOG_LEVELS)}."
            )
        return value.upper()

    @classmethod
    def load(cls, **overrides: object) -> Self:
        """Environment plus overrides (e.g. command line options). None means "not given"."""
        return cls(**{key: value for key, value in overrides.items() if value is not None})
