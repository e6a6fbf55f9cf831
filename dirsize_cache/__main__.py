"""
dirsize-cache - Main Entry Point

Reports the size of a directory twice, optionally sleeping in between, to
show the difference between a fresh walk and a cached lookup.
"""

import argparse
import logging
import sys
import time

from .cache import SizeCache
from .config import load_config
from .logger import setup_logging

logger = logging.getLogger(__name__)

USAGE = "Usage: dirsize-cache <directory_path> [sleep_seconds]"

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]


def format_size(size_bytes: int) -> str:
    """Convert bytes to a human-readable string using binary multiples."""
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1
    return f"{size:.2f} {SIZE_UNITS[unit_index]}"


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dirsize-cache",
        description="Report directory size, cached by directory modification time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dirsize-cache /var/log
  dirsize-cache ~/projects 10
  dirsize-cache /srv/data --skip-unreadable --verbose
        """,
    )
    # Optional here so a missing directory can exit with status 1, not argparse's 2
    parser.add_argument("directory", nargs="?", help="Directory to measure")
    parser.add_argument(
        "sleep_seconds",
        nargs="?",
        type=int,
        default=0,
        help="Seconds to wait between the two lookups (default: 0)",
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument(
        "--per-path-locks",
        action="store_true",
        help="Lock each directory separately instead of the whole cache",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Skip entries that cannot be read instead of failing",
    )
    parser.add_argument("--max-entries", type=int, help="Maximum number of cached directories")
    parser.add_argument("--log-file", help="Write log output to this file")
    parser.add_argument(
        "--human-readable", action="store_true", help="Also print sizes in KB/MB/GB"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def report(cache: SizeCache, directory: str, label: str, ordinal: str, human: bool) -> None:
    """Look up one directory size and print it with the elapsed time."""
    start = time.perf_counter()
    size_bytes = cache.get_size(directory)
    elapsed = time.perf_counter() - start

    line = f"Disk space usage for {directory}{label}: {size_bytes} bytes"
    if human:
        line += f" ({format_size(size_bytes)})"
    print(line)
    print(f"Time elapsed for {ordinal} call: {elapsed:.6f}s")


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if not args.directory:
        print(USAGE, file=sys.stderr)
        return 1
    if args.sleep_seconds < 0:
        print("[ERROR] sleep_seconds must not be negative", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    try:
        config = load_config(
            config_path=args.config,
            per_path_locks=args.per_path_locks,
            skip_unreadable=args.skip_unreadable,
            max_entries=args.max_entries,
            log_file=args.log_file,
            debug=args.verbose,
        )
    except ValueError as e:
        print(f"[ERROR] Configuration error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)
    from . import __version__

    logger.info("Starting dirsize-cache v%s", __version__)

    cache = SizeCache.from_config(config.cache)

    try:
        report(cache, args.directory, "", "first", args.human_readable)

        if args.sleep_seconds:
            logger.info("Sleeping %d seconds before second lookup", args.sleep_seconds)
        time.sleep(args.sleep_seconds)

        report(cache, args.directory, " (after modification)", "second", args.human_readable)
    except OSError as e:
        logger.error("Failed to compute size of %s: %s", args.directory, e)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
