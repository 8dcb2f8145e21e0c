"""
Configuration module for herb recommendation service.
Reads settings from the environment (and an optional .env file) and
configures the loguru sink shared by every module.
"""

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict

load_dotenv()

DEFAULT_ARTIFACTS_DIR = Path(__file__).resolve().parent / "artifacts"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    artifacts_dir: Path = DEFAULT_ARTIFACTS_DIR
    allowed_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    herb_search_cutoff: float = 85.0
    api_port_start: int = 8000
    api_port_end: int = 8010


def _parse_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings() -> Settings:
    """
    Build settings from environment variables.

    Returns:
        Settings instance with defaults for anything unset
    """
    return Settings(
        artifacts_dir=Path(os.getenv("ARTIFACTS_DIR", str(DEFAULT_ARTIFACTS_DIR))),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS", "")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        herb_search_cutoff=float(os.getenv("HERB_SEARCH_CUTOFF", "85")),
        api_port_start=int(os.getenv("API_PORT_START", "8000")),
        api_port_end=int(os.getenv("API_PORT_END", "8010")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with a single stderr sink.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or get_settings().log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )
