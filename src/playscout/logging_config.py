"""Process-wide logging setup for the batch entry points."""

import logging
from pathlib import Path

from playscout.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(config: Settings) -> logging.Logger:
    """
    Configure root logging once at process start.

    Always logs to the console; also appends to ``config.log_file`` when set.

    Args:
        config: Application settings

    Returns:
        The ``playscout`` package logger, for injection into components
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=config.log_level.upper(),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("playscout")
