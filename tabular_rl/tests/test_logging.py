"""
Tests for the logging and configuration modules.
"""

import os
import json
import logging
import tempfile
import unittest
from unittest import mock

import numpy as np

from tabular_rl.config import LoggerConfig
from tabular_rl.logging import (
    JsonFormatter,
    setup_logger,
    setup_logger_from_config,
    get_logger,
    reset_logger,
    log_phase,
    log_experience_summary
)
from tabular_rl.mdp import Experience


def make_record(msg, **extra):
    record = logging.LogRecord(
        name="tabular_rl", level=logging.INFO, pathname=__file__, lineno=1,
        msg=msg, args=None, exc_info=None, func="test"
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def read_events(path):
    with open(path) as f:
        return [json.loads(line) for line in f if line.strip()]


class TestJsonFormatter(unittest.TestCase):
    """Test cases for JsonFormatter."""

    def setUp(self):
        self.formatter = JsonFormatter()

    def test_dict_message(self):
        """Test that dict messages are placed under 'data'."""
        out = json.loads(self.formatter.format(make_record({"event": "x", "count": np.uint64(3)})))

        self.assertEqual(out["level"], "INFO")
        self.assertEqual(out["data"], {"event": "x", "count": 3})

    def test_string_message_with_data(self):
        """Test plain messages with an extra data attribute."""
        out = json.loads(self.formatter.format(make_record("hello", data={"v": np.float64(0.5)})))

        self.assertEqual(out["message"], "hello")
        self.assertEqual(out["data"], {"v": 0.5})

    def test_numpy_arrays(self):
        """Test that small arrays are listed and large ones summarized."""
        small = self.formatter._serialize(np.array([[1, 2], [3, 4]]))
        large = self.formatter._serialize(np.zeros((2, 3, 20)))

        self.assertEqual(small, [[1, 2], [3, 4]])
        self.assertTrue(large.startswith("ndarray(2x3x20): sample="))


class TestLogger(unittest.TestCase):
    """Test cases for logger setup."""

    def setUp(self):
        reset_logger()
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        reset_logger()
        self.tmpdir.cleanup()

    def test_default_logger_is_silent(self):
        """Test that the default logger writes no files."""
        cwd = os.getcwd()
        os.chdir(self.tmpdir.name)
        try:
            logger = get_logger()
            logger.warning("nothing to see")
            Experience(2, 2).reset()
        finally:
            os.chdir(cwd)

        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(os.listdir(self.tmpdir.name), [])

    def test_setup_is_idempotent(self):
        """Test that later calls return the configured logger."""
        first = setup_logger()
        second = setup_logger(debug=True, log_dir=self.tmpdir.name)

        self.assertIs(first, second)
        self.assertEqual(os.listdir(self.tmpdir.name), [])

    def test_explicit_setup_replaces_default(self):
        """Test that configuring after an Experience was created still logs to file."""
        Experience(2, 2)
        default = get_logger()
        self.assertEqual(default.level, logging.WARNING)

        logger = setup_logger(debug=True, log_level="debug", log_file="late.json",
                              log_dir=self.tmpdir.name)
        Experience(2, 2).reset()

        self.assertEqual(logger.level, logging.DEBUG)
        self.assertIs(get_logger(), logger)
        self.assertEqual(sum(isinstance(h, logging.NullHandler) for h in logger.handlers), 0)

        path = os.path.join(self.tmpdir.name, "late.json")
        self.assertTrue(os.path.exists(path))
        events = [e["data"]["event"] for e in read_events(path)]
        self.assertEqual(events, ["logger_initialized", "experience_created", "experience_reset"])

    def test_invalid_level_keeps_default(self):
        """Test that a rejected setup leaves the default logger in place."""
        default = get_logger()
        with self.assertRaises(ValueError):
            setup_logger(debug=True, log_level="verbose", log_dir=self.tmpdir.name)
        self.assertIs(get_logger(), default)
        self.assertEqual(os.listdir(self.tmpdir.name), [])

    def test_invalid_level(self):
        """Test that unknown levels are rejected."""
        with self.assertRaises(ValueError):
            setup_logger(debug=True, log_level="verbose", log_dir=self.tmpdir.name)

    def test_debug_writes_json_events(self):
        """Test that experience events reach the log file in debug mode."""
        setup_logger(debug=True, log_level="debug", log_file="run.json", log_dir=self.tmpdir.name)

        exp = Experience(2, 2)
        exp.record(0, 1, 1, 2.0)
        exp.set_visits(np.ones((2, 2, 2)))
        exp.reset()
        log_phase("estimation", {"episodes": 3})
        log_experience_summary(exp)

        events = [e["data"]["event"] for e in read_events(os.path.join(self.tmpdir.name, "run.json"))]

        self.assertEqual(events, [
            "logger_initialized",
            "experience_created",
            "experience_visits_imported",
            "experience_reset",
            "phase_start",
            "experience_summary"
        ])

    def test_experience_summary(self):
        """Test the content of an experience summary."""
        path = os.path.join(self.tmpdir.name, "summary.json")
        setup_logger(debug=True, log_level="debug", log_file=path)

        exp = Experience(3, 2)
        exp.record(0, 0, 1, 1.5)
        exp.record(0, 0, 1, 0.5)
        exp.record(2, 1, 0, -1.0)
        log_experience_summary(exp, name="run")

        summary = read_events(path)[-1]["data"]

        self.assertEqual(summary["event"], "run_summary")
        self.assertEqual(summary["shape"], [3, 2, 3])
        self.assertEqual(summary["total_visits"], 3)
        self.assertEqual(summary["total_reward"], 1.0)
        self.assertEqual(summary["visited_transitions"], 2)
        self.assertEqual(summary["visited_pairs"], 2)
        self.assertEqual(summary["max_visits"], 2)

    def test_setup_from_config(self):
        """Test configuring the logger from a LoggerConfig."""
        config = LoggerConfig(debug=True, log_level="warning", log_file="cfg.json",
                              log_dir=self.tmpdir.name)

        logger = setup_logger_from_config(config)

        self.assertEqual(logger.level, logging.WARNING)
        self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, "cfg.json")))


class TestLoggerConfig(unittest.TestCase):
    """Test cases for LoggerConfig."""

    def test_defaults(self):
        """Test the default configuration."""
        config = LoggerConfig()
        self.assertFalse(config.debug)
        self.assertEqual(config.log_level, "info")
        self.assertIsNone(config.log_file)
        self.assertIsNone(config.log_dir)

    def test_from_env(self):
        """Test reading the configuration from the environment."""
        env = {
            "TABULAR_RL_DEBUG": "true",
            "TABULAR_RL_LOG_LEVEL": "debug",
            "TABULAR_RL_LOG_FILE": "exp.json",
            "TABULAR_RL_LOG_DIR": "/tmp/tabular_rl_logs"
        }
        with tempfile.TemporaryDirectory() as tmpdir, mock.patch.dict(os.environ, env):
            config = LoggerConfig.from_env(os.path.join(tmpdir, "missing.env"))

        self.assertEqual(config, LoggerConfig(True, "debug", "exp.json", "/tmp/tabular_rl_logs"))

    def test_from_dotenv_file(self):
        """Test reading the configuration from a .env file."""
        with tempfile.TemporaryDirectory() as tmpdir, mock.patch.dict(os.environ, {}, clear=True):
            path = os.path.join(tmpdir, ".env")
            with open(path, "w") as f:
                f.write("TABULAR_RL_DEBUG=1\nTABULAR_RL_LOG_LEVEL=warning\n")

            config = LoggerConfig.from_env(path)

        self.assertTrue(config.debug)
        self.assertEqual(config.log_level, "warning")
        self.assertIsNone(config.log_file)


if __name__ == '__main__':
    unittest.main()
