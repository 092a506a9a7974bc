"""Logging configuration for the application.

Each top-level package logs to its own file under ``logs/``, named after the
package (``src.dashboard.services`` writes to ``logs/src.log``). Noisy client
libraries are held at WARNING so the file stays readable.
"""
import logging
import sys
from pathlib import Path
from typing import Dict

# Create logs directory if it doesn't exist
log_dir = Path(__file__).parent.parent.parent / 'logs'
log_dir.mkdir(exist_ok=True)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ('httpx', 'httpcore', 'hpack')


def log_file_for(name: str) -> Path:
    """Log file path for a logger name, keyed on its top-level package."""
    return log_dir / f"{name.split('.')[0]}.log"


def setup_logging(name: str, level: int = logging.DEBUG,
                  levels: Dict[str, int] = None) -> logging.Logger:
    """Set up logging with both file and console output.

    Args:
        name: Logger name, usually the top-level package
        level: Level for the file handler
        levels: Optional per-module overrides, e.g.
            ``{'src.dashboard.services.upcoming_content.ordering': logging.INFO}``

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for module, module_level in (levels or {}).items():
        logging.getLogger(module).setLevel(module_level)
    for quiet in QUIET_LOGGERS:
        logging.getLogger(quiet).setLevel(logging.WARNING)

    # Prevent duplicate handlers
    if not logger.handlers:
        # Console only shows problems
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        ))

        file_handler = logging.FileHandler(log_file_for(name), encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

        logger.addHandler(console)
        logger.addHandler(file_handler)

    return logger
