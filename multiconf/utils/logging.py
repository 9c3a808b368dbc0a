"""Logging configuration utilities for multiconf."""

import logging
import logging.config
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    config_path: Optional[Union[str, Path]] = None,
    default_level: int = logging.INFO,
    env_key: str = "MULTICONF_LOG_CFG",
    environment: Optional[str] = None,
    log_dir: Optional[Path] = None,
) -> None:
    """Setup logging configuration.

    The configuration file is a YAML ``logging.config.dictConfig`` document.
    A top-level mapping named after ``environment`` may override its
    ``formatters``, ``handlers`` and ``loggers`` sections.

    Args:
        config_path: Path to the logging configuration file
        default_level: Level used when no configuration file is found
        env_key: Environment variable that overrides ``config_path``
        environment: Environment name (development, production, testing)
        log_dir: Directory for a rotating log file in the default setup
    """
    if config_path is None:
        config_path = os.getenv(env_key)

    if config_path is not None and Path(config_path).exists():
        try:
            with open(config_path, encoding="utf-8") as config_file:
                config = yaml.safe_load(config_file) or {}

            if environment and environment in config:
                env_config = config.pop(environment)
                for section in ("formatters", "handlers", "loggers"):
                    if section in env_config:
                        config.setdefault(section, {}).update(env_config[section])

            for name in list(config):
                if isinstance(config[name], dict) and name not in (
                    "formatters",
                    "filters",
                    "handlers",
                    "loggers",
                    "root",
                ):
                    # Overrides for environments other than the active one
                    del config[name]

            logging.config.dictConfig(config)
            return

        except (OSError, yaml.YAMLError, ValueError, TypeError, KeyError) as e:
            print(
                f"Error loading logging configuration from {config_path}: {e}",
                file=sys.stderr,
            )
            print("Using default logging configuration", file=sys.stderr)

    _setup_default_logging(default_level, log_dir)


def _setup_default_logging(level: int, log_dir: Optional[Path]) -> None:
    """Setup default logging with a console handler and an optional file handler.

    Args:
        level: Logging level
        log_dir: Directory for ``multiconf.log``, no file handler if None
    """
    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "multiconf.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

