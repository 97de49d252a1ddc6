"""Runtime configuration.

Defaults can be set in a `.env` file in the working directory or in the
process environment; the environment wins. Command-line flags override
both.

    SPENDWITNESS_OUTPUT     default witness file (input.json)
    SPENDWITNESS_LOG_LEVEL  default log level (WARNING)
    SPENDWITNESS_DEPTH      tree depth used when the depth argument is "-"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values


DEFAULT_OUTPUT = Path("input.json")
DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    output: Path = DEFAULT_OUTPUT
    log_level: str = DEFAULT_LOG_LEVEL
    depth: Optional[int] = None


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Build Settings from a .env file overlaid with os.environ.

    Raises ValueError on an unparseable depth or unknown log level.
    """
    path = env_file if env_file is not None else Path.cwd() / ".env"
    values: dict[str, Optional[str]] = {}
    if path.exists():
        values.update(dotenv_values(path))
    values.update(os.environ)

    output = values.get("SPENDWITNESS_OUTPUT") or str(DEFAULT_OUTPUT)
    log_level = (values.get("SPENDWITNESS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Unknown SPENDWITNESS_LOG_LEVEL: {log_level}")

    depth: Optional[int] = None
    raw_depth = values.get("SPENDWITNESS_DEPTH")
    if raw_depth:
        depth = parse_depth(raw_depth)

    return Settings(output=Path(output), log_level=log_level, depth=depth)


def parse_depth(text: str) -> int:
    """Parse a non-negative tree depth written in plain ASCII digits."""
    if not text.isdecimal() or not text.isascii():
        raise ValueError(f"Tree depth must be a non-negative integer, got {text!r}")
    return int(text)
