"""Game configuration loaded from defaults, environment and CLI overrides."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field

from seabattle.engine.board import DEFAULT_BOARD_SIZE, DEFAULT_SHIP_COUNT
from seabattle.telemetry.config import bool_from_env


class GameConfig(BaseModel):
    """Settings for one game session.

    Ship capacity is checked when boards are built, so an over-full board is
    reported as :class:`~seabattle.engine.errors.InvalidConfigurationError`.
    """

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=1)
    ship_count: int = Field(default=DEFAULT_SHIP_COUNT, ge=0)
    seed: int | None = None
    color: bool = True
    show_tutorial_prompt: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> "GameConfig":
        """Construct config from `SEABATTLE_*` env vars; non-None overrides win."""

        data: Dict[str, Any] = {}
        int_fields = {
            "board_size": "SEABATTLE_BOARD_SIZE",
            "ship_count": "SEABATTLE_SHIP_COUNT",
            "seed": "SEABATTLE_SEED",
        }
        for field, env_name in int_fields.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field] = value.strip()

        color = bool_from_env("SEABATTLE_COLOR")
        if color is not None:
            data["color"] = color
        if os.getenv("NO_COLOR"):
            data["color"] = False

        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
