"""
Directory size cache keyed by modification time.

A cached size is reused for as long as the directory's own mtime has not
advanced past the mtime observed when the size was computed. Only the
top-level directory's mtime is checked, so a change to a file nested in a
subdirectory is not seen until the directory itself is touched.
"""

import functools
import logging
import math
import os
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from cachetools import LRUCache

from .config import CacheConfig
from .walker import compute_size

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    size_bytes: int
    observed_mtime: int  # st_mtime_ns of the directory at walk time


@dataclass
class PathLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # threads holding or waiting on lock


class SizeCache:
    """
    Thread-safe cache of directory sizes.

    By default a single lock is held for the whole of get_size(), including
    any walk, so a slow walk of one directory blocks lookups of every other.
    With per_path_locks=True each path is serialized on its own lock and only
    the table itself is guarded globally. A path lock only exists while some
    thread is looking that path up.
    """

    def __init__(
        self,
        walker: Callable[[str], int] = compute_size,
        *,
        per_path_locks: bool = False,
        max_entries: int | None = None,
    ):
        """
        Args:
            walker: Callable returning the total size of a directory.
            per_path_locks: Lock per path instead of one lock for everything.
            max_entries: Evict least recently used entries beyond this count.
                None keeps every entry for the life of the cache.
        """
        self._walker = walker
        self._per_path_locks = per_path_locks
        self._entries: LRUCache = LRUCache(maxsize=max_entries or math.inf)
        self._lock = threading.Lock()
        self._path_locks: dict[str, PathLock] = {}
        self.walk_count = 0

    @classmethod
    def from_config(cls, config: CacheConfig) -> "SizeCache":
        walker = compute_size
        if config.skip_unreadable:
            walker = functools.partial(compute_size, skip_unreadable=True)
        return cls(
            walker,
            per_path_locks=config.per_path_locks,
            max_entries=config.max_entries,
        )

    def get_size(self, path: str | os.PathLike) -> int:
        """
        Return the total size of regular files under path.

        The cached size is returned without walking when the directory's
        mtime is not newer than the one recorded with it. Otherwise the
        directory is walked and the entry replaced.

        Raises:
            OSError: If path cannot be stat'd, or the walk fails. A failed
                walk leaves any existing entry unchanged.
        """
        key = self._normalize_path(path)
        if not self._per_path_locks:
            with self._lock:
                return self._lookup_or_compute(key)

        with self._lock:
            path_lock = self._path_locks.get(key)
            if path_lock is None:
                path_lock = self._path_locks[key] = PathLock()
            path_lock.users += 1
        try:
            with path_lock.lock:
                return self._lookup_or_compute(key)
        finally:
            with self._lock:
                path_lock.users -= 1
                if path_lock.users == 0:
                    del self._path_locks[key]

    def _lookup_or_compute(self, key: str) -> int:
        current_mtime = os.stat(key).st_mtime_ns

        entry = self._read_entry(key)
        if entry is not None:
            if current_mtime <= entry.observed_mtime:
                logger.debug("Cache hit for %s: %d bytes", key, entry.size_bytes)
                return entry.size_bytes
            logger.debug(
                "Cache stale for %s: mtime %d > %d", key, current_mtime, entry.observed_mtime
            )
        else:
            logger.debug("Cache miss for %s", key)

        start = time.perf_counter()
        size_bytes = self._walker(key)
        logger.debug(
            "Walked %s in %.3fs: %d bytes", key, time.perf_counter() - start, size_bytes
        )

        self._write_entry(key, CacheEntry(size_bytes=size_bytes, observed_mtime=current_mtime))
        return size_bytes

    def _read_entry(self, key: str) -> CacheEntry | None:
        # Coarse mode: get_size() already holds self._lock
        if not self._per_path_locks:
            return self._entries.get(key)
        with self._lock:
            return self._entries.get(key)

    def _write_entry(self, key: str, entry: CacheEntry) -> None:
        if not self._per_path_locks:
            self._entries[key] = entry
            self.walk_count += 1
            return
        with self._lock:
            self._entries[key] = entry
            self.walk_count += 1

    def peek(self, path: str | os.PathLike) -> CacheEntry | None:
        """Return the cached entry for path without touching the filesystem."""
        key = self._normalize_path(path)
        with self._lock:
            return self._entries.get(key)

    def invalidate(self, path: str | os.PathLike) -> None:
        """Drop the entry for path so the next lookup walks again."""
        key = self._normalize_path(path)
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path) -> bool:
        key = self._normalize_path(path)
        with self._lock:
            return key in self._entries

    def _normalize_path(self, path: str | os.PathLike) -> str:
        """Make path absolute and remove any trailing separator."""
        return os.path.abspath(os.fspath(path))
