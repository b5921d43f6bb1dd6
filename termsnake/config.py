"""
Runtime configuration for termsnake.

Values come from the environment (a local .env file is honoured through
python-dotenv), and command line flags override them.

    SNAKE_TICK_MS     tick interval in milliseconds (default: 150)
    SNAKE_CHAR        glyph drawn for every snake cell (default: *)
    SNAKE_FOOD_CHAR   glyph drawn for the food (default: $)
    SNAKE_LOG_FILE    write logs here; logging is discarded when unset
    SNAKE_LOG_LEVEL   logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from termsnake.domain.constants import (
    TICK_TIMEOUT_MS,
    SNAKE_CHARACTER,
    FOOD_CHARACTER,
    BLANK_CHARACTER,
    BOX,
)


@dataclass
class GameConfig:
    tick_ms: int = TICK_TIMEOUT_MS
    snake_char: str = SNAKE_CHARACTER
    food_char: str = FOOD_CHARACTER
    blank_char: str = BLANK_CHARACTER
    box: Dict[str, str] = field(default_factory=lambda: dict(BOX))
    log_file: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self):
        if self.tick_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {self.tick_ms}")
        for name in ("snake_char", "food_char", "blank_char"):
            value = getattr(self, name)
            if len(value) != 1:
                raise ValueError(f"{name} must be a single character, got {value!r}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        missing = set(BOX) - set(self.box)
        if missing:
            raise ValueError(f"Box glyphs missing: {sorted(missing)}")

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0


def load_config(**overrides) -> GameConfig:
    """
    Build a GameConfig from the environment.

    Keyword arguments that are not None take precedence over the environment.
    """
    load_dotenv()

    values = {
        "tick_ms": int(os.getenv("SNAKE_TICK_MS", TICK_TIMEOUT_MS)),
        "snake_char": os.getenv("SNAKE_CHAR", SNAKE_CHARACTER),
        "food_char": os.getenv("SNAKE_FOOD_CHAR", FOOD_CHARACTER),
        "log_file": os.getenv("SNAKE_LOG_FILE") or None,
        "log_level": os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
    }
    for key, value in overrides.items():
        if value is not None:
            values[key] = value

    return GameConfig(**values)
