"""
Logging utilities for filter design runs.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    name: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Logging level for the file handler
        format_string: Custom format string
        name: Logger name (if None, uses root logger)

    Returns:
        Configured logger
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S')

    # Console handler (warnings only - rich handles the main display)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class ExperimentLogger:
    """
    Per-run logger writing a timestamped file under *log_dir*.
    """

    def __init__(
        self,
        experiment_name: str,
        log_dir: str = 'logs',
        console_level: int = logging.WARNING
    ):
        self.experiment_name = experiment_name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        self.log_file = self.log_dir / f'{experiment_name}_{timestamp}.log'

        self.logger = setup_logging(
            log_file=str(self.log_file),
            level=logging.DEBUG,
            name=experiment_name
        )

        for handler in self.logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(console_level)

    def info(self, msg: str):
        self.logger.info(msg)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def log_config(self, config: dict):
        """Log run configuration."""
        self.logger.info("=" * 60)
        self.logger.info("CONFIGURATION")
        self.logger.info("=" * 60)
        self._log_dict(config, indent=2)
        self.logger.info("=" * 60)

    def log_results(self, results: dict, title: str = "RESULTS"):
        """Log run results."""
        self.logger.info("=" * 60)
        self.logger.info(title)
        self.logger.info("=" * 60)
        self._log_dict(results, indent=2)
        self.logger.info("=" * 60)

    def _log_dict(self, d: dict, indent: int = 0):
        """Recursively log dictionary contents."""
        prefix = " " * indent
        for key, value in d.items():
            if isinstance(value, dict):
                self.logger.info(f"{prefix}{key}:")
                self._log_dict(value, indent + 2)
            elif isinstance(value, float):
                self.logger.info(f"{prefix}{key}: {value:.6g}")
            else:
                self.logger.info(f"{prefix}{key}: {value}")
