import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LogConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(message)s"


def get_level(name: str) -> int:
    """
    Translate a level name such as "debug" or "WARNING" into its number.

    Raises:
        ValueError: If name is not a standard logging level.
    """
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {name}")
    return level


def setup_logging(config: "LogConfig") -> None:
    """
    Configure the root logger from a LogConfig.

    Adds an append-mode FileHandler when config.file is set and a stderr
    StreamHandler when config.console is True. Standard output is left to
    the size report. Existing root handlers are replaced.

    Raises:
        ValueError: If config.level is not a standard logging level.
    """
    level = get_level(config.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))

    if config.console:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
