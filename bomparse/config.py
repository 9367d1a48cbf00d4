"""Runtime settings for bomparse, read from the environment and an optional .env file."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_SPACES = 2
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """
    Settings shared by the command-line tool and the parser facade.

    Environment variables:
    - BOMPARSE_SPACES: default JSON indentation (default 2)
    - BOMPARSE_LOG_LEVEL: logging level name (default WARNING)
    - BOMPARSE_ENCODING: input encoding; detected with chardet when unset
    """
    spaces: int = DEFAULT_SPACES
    log_level: str = DEFAULT_LOG_LEVEL
    encoding: Optional[str] = None


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Load settings from the environment.

    Values already present in the environment take priority over the .env
    file.

    Args:
        dotenv_path: Explicit .env file to load (default: search from cwd)

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    log_level = (os.getenv("BOMPARSE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"BOMPARSE_LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(
        spaces=_int_from_env("BOMPARSE_SPACES", DEFAULT_SPACES),
        log_level=log_level,
        encoding=os.getenv("BOMPARSE_ENCODING") or None,
    )
