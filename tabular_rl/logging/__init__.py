"""
Logging module for the tabular RL library.

This module provides JSON-formatted logging functionality for the library.
"""

from tabular_rl.logging.logger import (
    JsonFormatter,
    setup_logger,
    setup_logger_from_config,
    get_logger,
    reset_logger,
    log_phase,
    log_experience_summary
)

__all__ = [
    "JsonFormatter",
    "setup_logger",
    "setup_logger_from_config",
    "get_logger",
    "reset_logger",
    "log_phase",
    "log_experience_summary"
]
