import configparser
from dataclasses import dataclass, field
from pathlib import Path

from .logger import get_level

TRUE_VALUES = ("true", "1", "yes")


@dataclass
class CacheConfig:
    per_path_locks: bool = False
    max_entries: int | None = None  # None means unbounded
    skip_unreadable: bool = False  # Skip entries that fail to list/stat


@dataclass
class LogConfig:
    level: str = "WARNING"
    file: str = ""
    console: bool = True


@dataclass
class AppConfig:
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LogConfig = field(default_factory=LogConfig)


def _parse_max_entries(value) -> int:
    try:
        max_entries = int(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid max_entries value in config: '{value}' - must be an integer"
        )
    if max_entries < 1:
        raise ValueError(f"Invalid max_entries value in config: '{value}' - must be positive")
    return max_entries


def load_config(config_path: str | None = None, **cli_args) -> AppConfig:
    """
    Load configuration from an INI file and/or CLI arguments.
    CLI arguments take precedence over config file.

    Args:
        config_path: Path to the INI configuration file.
        **cli_args: Key-value pairs from command line arguments.

    Returns:
        AppConfig: The populated configuration object.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If a value cannot be parsed.
    """
    # Initialize with defaults
    cache_config = {
        "per_path_locks": False,
        "max_entries": None,
        "skip_unreadable": False,
    }
    log_config = {
        "level": "WARNING",
        "file": "",
        "console": True,
    }

    # Parse INI file if provided
    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        parser = configparser.ConfigParser()
        parser.read(config_file, encoding="utf-8")

        # Load [cache] section
        if parser.has_section("cache"):
            cache_section = parser["cache"]
            if cache_section.get("per_path_locks"):
                cache_config["per_path_locks"] = (
                    cache_section.get("per_path_locks").lower() in TRUE_VALUES
                )
            if cache_section.get("max_entries"):
                cache_config["max_entries"] = _parse_max_entries(
                    cache_section.get("max_entries")
                )
            if cache_section.get("skip_unreadable"):
                cache_config["skip_unreadable"] = (
                    cache_section.get("skip_unreadable").lower() in TRUE_VALUES
                )

        # Load [logging] section
        if parser.has_section("logging"):
            log_section = parser["logging"]
            if log_section.get("level"):
                log_config["level"] = log_section.get("level")
            if log_section.get("file"):
                log_config["file"] = log_section.get("file")
            if log_section.get("console"):
                log_config["console"] = log_section.get("console").lower() in TRUE_VALUES

    # Override with CLI arguments (cli_args take precedence)
    if cli_args.get("per_path_locks"):
        cache_config["per_path_locks"] = True
    if cli_args.get("skip_unreadable"):
        cache_config["skip_unreadable"] = True
    if cli_args.get("max_entries") is not None:
        cache_config["max_entries"] = _parse_max_entries(cli_args["max_entries"])
    if cli_args.get("log_file") is not None:
        log_config["file"] = cli_args["log_file"]
    if cli_args.get("debug"):
        log_config["level"] = "DEBUG"
        log_config["console"] = True

    get_level(log_config["level"])  # Raises ValueError for unknown names
    level = log_config["level"].upper()

    return AppConfig(
        cache=CacheConfig(
            per_path_locks=cache_config["per_path_locks"],
            max_entries=cache_config["max_entries"],
            skip_unreadable=cache_config["skip_unreadable"],
        ),
        logging=LogConfig(
            level=level,
            file=log_config["file"],
            console=log_config["console"],
        ),
    )
