"""Load configuration from file and environment"""
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from ..workdays import DateResolver, default_calendar, load_calendar
from .config import WorktallyConfig

# Load .env file if present
load_dotenv()

CONFIG_ENV = 'WORKTALLY_CONFIG'
LOG_LEVEL_ENV = 'WORKTALLY_LOG_LEVEL'


def load_config(path: Optional[Union[str, Path]] = None) -> WorktallyConfig:
    """
    Load configuration.

    Order: explicit path, then $WORKTALLY_CONFIG, then built-in defaults.
    $WORKTALLY_LOG_LEVEL overrides the configured log level.

    Raises:
        ValueError: config file is not valid JSON or has invalid settings
    """
    path = path or os.getenv(CONFIG_ENV)
    if path:
        try:
            config = WorktallyConfig.from_json(Path(path).read_text(encoding='utf-8'))
        except OSError as e:
            raise ValueError(f"Cannot read config {path}: {e}") from e
        except ValueError as e:
            raise ValueError(f"Invalid config {path}: {e}") from e
    else:
        config = WorktallyConfig()

    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        config.log_level = level.upper()
    return config


def build_resolver(config: WorktallyConfig) -> DateResolver:
    """DateResolver using the configured holiday file, or the built-in calendar."""
    if config.holidays_file:
        try:
            calendar = load_calendar(config.holidays_file)
        except OSError as e:
            raise ValueError(f"Cannot read holidays file {config.holidays_file}: {e}") from e
    else:
        calendar = default_calendar()
    return DateResolver(calendar)
