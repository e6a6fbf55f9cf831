"""
Shared pytest fixtures for dirsize-cache tests.
"""

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from dirsize_cache.cache import SizeCache
from dirsize_cache.walker import compute_size


@pytest.fixture
def size_tree(tmp_path: Path) -> Path:
    """
    Creates a directory with files of 100, 250 and 0 bytes and a nested
    subdirectory holding a 50 byte file (400 bytes in total).

    Returns:
        Path to the tree root.
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.bin").write_bytes(b"a" * 100)
    (root / "b.bin").write_bytes(b"b" * 250)
    (root / "empty.bin").write_bytes(b"")
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.bin").write_bytes(b"c" * 50)
    return root


@pytest.fixture
def set_mtime() -> Callable[[Path, int], int]:
    """
    Returns a helper that moves a path's mtime by a number of seconds.

    Filesystem timestamp granularity makes "touch and compare" flaky, so tests
    move mtimes explicitly. The helper returns the new st_mtime_ns.
    """

    def _set_mtime(path: Path, delta_seconds: int) -> int:
        st = os.stat(path)
        new_mtime = st.st_mtime_ns + delta_seconds * 1_000_000_000
        os.utime(path, ns=(st.st_atime_ns, new_mtime))
        return os.stat(path).st_mtime_ns

    return _set_mtime


class CountingWalker:
    """Walker wrapper that records every path it is asked to measure."""

    def __init__(self, walker=compute_size):
        self._walker = walker
        self.calls: list[str] = []

    def __call__(self, path):
        self.calls.append(path)
        return self._walker(path)


@pytest.fixture
def counting_walker() -> CountingWalker:
    """Creates a CountingWalker around the real compute_size."""
    return CountingWalker()


@pytest.fixture
def size_cache(counting_walker: CountingWalker) -> SizeCache:
    """Creates a fresh coarse-locked SizeCache using the counting walker."""
    return SizeCache(counting_walker)


@pytest.fixture
def tmp_config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Creates a temporary INI configuration file for config tests.

    Returns:
        Path to the temporary config file.
    """
    config_content = """[cache]
per_path_locks = true
max_entries = 128
skip_unreadable = yes

[logging]
level = debug
file = test.log
console = false
"""
    config_path = tmp_path / "test_config.ini"
    config_path.write_text(config_content, encoding="utf-8")
    yield config_path


@pytest.fixture
def clean_root_logger() -> Generator[logging.Logger, None, None]:
    """Yields the root logger and restores its handlers and level afterwards."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
