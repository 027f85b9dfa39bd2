"""Runtime settings for an application embedding the chess core."""

import logging
import os
from typing import Any, Mapping, Self

from pydantic import BaseModel, field_validator

from src.core.shared_types import PieceType

ENV_PREFIX = "CHESS_"


class Settings(BaseModel):
    log_level: str = "INFO"
    default_promotion: PieceType = PieceType.QUEEN

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("default_promotion", mode="before")
    @classmethod
    def lower_case_piece_name(cls, value: Any) -> Any:
        # environment variables tend to be written as QUEEN
        return value.lower() if isinstance(value, str) else value

    @field_validator("default_promotion")
    @classmethod
    def validate_default_promotion(cls, value: PieceType) -> PieceType:
        if value in (PieceType.PAWN, PieceType.KING):
            raise ValueError(f"A pawn cannot promote to a {value}.")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> Self:
        """Read CHESS_LOG_LEVEL / CHESS_DEFAULT_PROMOTION. Unset variables keep their defaults."""
        values = {
            field_name: environ[f"{ENV_PREFIX}{field_name.upper()}"]
            for field_name in cls.model_fields
            if f"{ENV_PREFIX}{field_name.upper()}" in environ
        }
        return cls.model_validate(values)
