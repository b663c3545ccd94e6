"""
Runtime settings, read from the environment (and a .env file if present).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .base import DEFAULT_MODEL

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "train.csv"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_path: Path = DEFAULT_DATA_PATH
    host: str = "0.0.0.0"
    port: int = 5001
    model: str = DEFAULT_MODEL
    max_tokens: int = 1500
    anthropic_api_key: Optional[str] = None
    history_turns: int = 3
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load .env (without overriding real environment variables) and build Settings."""
    load_dotenv(env_file)
    return Settings(
        data_path=Path(os.getenv("SALES_DATA_PATH", str(DEFAULT_DATA_PATH))),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5001")),
        model=os.getenv("SALES_AGENT_MODEL", DEFAULT_MODEL),
        max_tokens=int(os.getenv("SALES_AGENT_MAX_TOKENS", "1500")),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)
