"""
Logger implementation for the tabular RL library.

This module provides JSON-formatted logging functionality for the library.
When debugging is enabled, logs are written to timestamped files in a 'logs'
directory; otherwise the library logger stays silent.
"""

import os
import json
import logging
import datetime
from typing import Dict, Any, Optional

import numpy as np

from tabular_rl.config import LoggerConfig

LOGGER_NAME = "tabular_rl"

LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR
}


# Custom JSON formatter that can handle numpy arrays and other complex types
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for logging."""

    def _serialize(self, obj: Any) -> Any:
        """Serialize objects to JSON-compatible format."""
        if isinstance(obj, np.ndarray):
            # Only show a sample for large arrays
            if obj.size > 100:
                shape_str = 'x'.join(str(dim) for dim in obj.shape)
                sample = obj.flatten()[:5].tolist()
                return f"ndarray({shape_str}): sample={sample}..."
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, (list, tuple)):
            if len(obj) > 100:
                return [self._serialize(item) for item in list(obj)[:5]] + ["..."]
            return [self._serialize(item) for item in obj]
        elif isinstance(obj, dict):
            return {k: self._serialize(v) for k, v in obj.items()}
        elif hasattr(obj, '__dict__'):
            return {
                "__type": obj.__class__.__name__,
                **{k: self._serialize(v) for k, v in obj.__dict__.items()
                   if not k.startswith('_')}
            }
        return obj

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if isinstance(record.msg, dict):
            log_data['data'] = self._serialize(record.msg)
        else:
            log_data['message'] = record.getMessage()

            if hasattr(record, 'data'):
                log_data['data'] = self._serialize(record.data)

        return json.dumps(log_data)


# Global logger instance
_logger = None

# Whether _logger holds the default set up lazily by get_logger()
_implicit = False


def setup_logger(
    debug: bool = False,
    log_level: str = "info",
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None
) -> logging.Logger:
    """
    Set up the logger with the specified configuration.

    The logger is configured once; later calls return the configured
    instance unchanged until :func:`reset_logger` is called. The silent
    default installed by :func:`get_logger` before any explicit setup is
    replaced by the first explicit call.

    Args:
        debug: Whether to enable debugging
        log_level: The log level (debug, info, warning, error)
        log_file: Optional custom log file path
        log_dir: Directory for log files (defaults to ./logs)

    Returns:
        Configured logger instance

    Raises:
        ValueError: If log_level is not a known level name
    """
    global _logger

    if _logger is not None and not _implicit:
        return _logger

    level = LEVEL_MAP.get(log_level.lower())
    if level is None:
        raise ValueError(f"Unknown log level: {log_level!r}")

    if _implicit:
        reset_logger()

    logger = logging.getLogger(LOGGER_NAME)

    # Minimal logging when debug is False
    logger.setLevel(level if debug else logging.WARNING)

    if debug or log_file is not None:
        logs_dir = log_dir if log_dir is not None else os.path.join(os.getcwd(), "logs")
        os.makedirs(logs_dir, exist_ok=True)

        if log_file is None:
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(logs_dir, f"tabular_rl_{timestamp}.json")
        elif not os.path.isabs(log_file):
            log_file = os.path.join(logs_dir, log_file)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger

    if debug:
        logger.info({
            "event": "logger_initialized",
            "log_level": log_level,
            "log_file": log_file
        })

    return logger


def setup_logger_from_config(config: LoggerConfig) -> logging.Logger:
    """
    Set up the logger from a :class:`LoggerConfig`.

    Args:
        config: Logger configuration, e.g. from LoggerConfig.from_env()

    Returns:
        Configured logger instance
    """
    return setup_logger(
        debug=config.debug,
        log_level=config.log_level,
        log_file=config.log_file,
        log_dir=config.log_dir
    )


def get_logger() -> logging.Logger:
    """
    Get the configured logger instance.

    Returns:
        Logger instance
    """
    global _logger, _implicit

    if _logger is None:
        # Set up with default configuration if not already configured
        _logger = setup_logger()
        _implicit = True

    return _logger


def reset_logger() -> None:
    """Detach and close all handlers so the logger can be set up again."""
    global _logger, _implicit

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    _logger = None
    _implicit = False


# Helper functions for common logging patterns

def log_phase(phase: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Log the start of a new processing phase.

    Args:
        phase: Name of the phase
        details: Optional details about the phase
    """
    logger = get_logger()

    log_data = {
        "event": "phase_start",
        "phase": phase
    }

    if details:
        log_data["details"] = details

    logger.info(log_data)


def log_experience_summary(experience, name: str = "experience") -> None:
    """
    Log a summary of the statistics held by an Experience.

    Args:
        experience: The Experience to summarize
        name: Name to identify this experience in the log
    """
    logger = get_logger()

    if not logger.isEnabledFor(logging.DEBUG):
        return

    visits = experience.get_visit_table()
    rewards = experience.get_reward_table()
    visits_sum = experience.get_visit_sum_table()

    logger.debug({
        "event": f"{name}_summary",
        "shape": visits.shape,
        "total_visits": int(visits.sum()),
        "total_reward": float(rewards.sum()),
        "visited_transitions": int(np.count_nonzero(visits)),
        "visited_pairs": int(np.count_nonzero(visits_sum)),
        "max_visits": int(visits.max()) if visits.size else 0
    })
