"""
Recursive size computation for a directory tree.

Sums the apparent size of every regular file below a directory. Symlinks
are never followed and, like devices, sockets and FIFOs, contribute nothing.
"""

import logging
import os

logger = logging.getLogger(__name__)


def compute_size(path: str | os.PathLike, *, skip_unreadable: bool = False) -> int:
    """
    Return the total byte size of all regular files under path.

    Args:
        path: Directory to walk.
        skip_unreadable: If True, a subdirectory that cannot be listed or an
            entry that cannot be stat'd is logged and skipped. If False
            (the default), the first such error aborts the walk.

    Returns:
        Total size in bytes.

    Raises:
        OSError: If path itself cannot be listed, or any entry below it
            fails while skip_unreadable is False.
    """
    total = 0
    # Iterative depth-first walk; deep trees must not hit the recursion limit
    pending = [os.fspath(path)]
    root = True

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError as e:
                        if not skip_unreadable:
                            raise
                        logger.warning("Skipping unreadable entry %s: %s", entry.path, e)
        except OSError as e:
            if root or not skip_unreadable:
                raise
            logger.warning("Skipping unreadable directory %s: %s", current, e)
        root = False

    return total
