"""
Configuration for the tabular RL library.

Settings can be given explicitly or read from the environment (a .env file
in the working directory is loaded first).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TABULAR_RL_"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Logger settings.
    """

    debug: bool = False
    """Whether debug logging (and log files) are enabled"""

    log_level: str = "info"
    """Log level used when debug is enabled (debug, info, warning, error)"""

    log_file: Optional[str] = None
    """Custom log file path, relative paths are placed inside log_dir"""

    log_dir: Optional[str] = None
    """Directory for log files, defaults to ./logs"""

    @staticmethod
    def from_env(dotenv_path: Optional[str] = None) -> 'LoggerConfig':
        """
        Build a configuration from TABULAR_RL_* environment variables.

        Args:
            dotenv_path: Optional path of a .env file to load first

        Returns:
            New LoggerConfig
        """
        load_dotenv(dotenv_path)

        debug = os.getenv(ENV_PREFIX + "DEBUG", "")
        return LoggerConfig(
            debug=debug.strip().lower() in _TRUE_VALUES,
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "info"),
            log_file=os.getenv(ENV_PREFIX + "LOG_FILE") or None,
            log_dir=os.getenv(ENV_PREFIX + "LOG_DIR") or None
        )
