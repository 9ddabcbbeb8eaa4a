"""Logging utilities"""

import logging
from pathlib import Path

from boottidy.config import LoggingConfig


def setup_logging(log_file: Path | None = None, level: int | str = logging.INFO) -> None:
    """Setup logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Setup logging from the ``logging`` section of a config file."""
    log_file = Path(config.log_file) if config.log_file else None
    setup_logging(log_file, level=config.level.upper())
