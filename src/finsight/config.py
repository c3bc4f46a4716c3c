"""Environment-driven settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from finsight.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CHART_DAYS = 90
DEFAULT_CURRENCY_PREFIX = "Rp"
DEFAULT_THOUSANDS_SEPARATOR = "."


def load_environment() -> None:
    """Load a .env file from the working directory tree without overriding."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)


def get_env_int(name: str, default: int, min_value: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def default_database_path() -> str:
    """Return ~/.finsight/finsight.db, creating the directory if needed."""
    db_dir = Path.home() / ".finsight"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "finsight.db")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    db_path: Optional[str]
    log_level: str
    log_dir: Optional[str]
    currency_prefix: str
    thousands_separator: str
    chart_days: int


def get_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    load_environment()
    return Settings(
        db_path=os.getenv("FINSIGHT_DB_PATH"),
        log_level=os.getenv("FINSIGHT_LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("FINSIGHT_LOG_DIR"),
        currency_prefix=os.getenv("FINSIGHT_CURRENCY_PREFIX", DEFAULT_CURRENCY_PREFIX),
        thousands_separator=os.getenv(
            "FINSIGHT_THOUSANDS_SEPARATOR", DEFAULT_THOUSANDS_SEPARATOR
        ),
        chart_days=get_env_int("FINSIGHT_CHART_DAYS", DEFAULT_CHART_DAYS, min_value=1),
    )
