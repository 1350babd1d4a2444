"""Advisory locking of the configuration root.

Mutating workflows can touch several set files (add --move edits the
target and every other set), so a single lock covers the whole root
rather than individual sets.
"""

import fcntl
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pkgsets.core.errors import LockError
from pkgsets.core.paths import get_lock_path

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.1


@contextmanager
def root_lock(root: Path, *, timeout: float = 10.0, enabled: bool = True) -> Iterator[None]:
    """Hold an exclusive flock on <root>/.lock for the duration of the block.

    Args:
        root: Configuration root directory.
        timeout: Seconds to keep retrying before giving up.
        enabled: If False, the block runs without locking.

    Raises:
        LockError: If the lock is still held by another process after timeout.
    """
    if not enabled:
        yield
        return

    lock_path = get_lock_path(root)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    with open(lock_path, "w") as lock_file:
        start = time.monotonic()
        while True:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except OSError as e:
                if time.monotonic() - start > timeout:
                    msg = f"Cannot acquire lock on {root} after {timeout}s"
                    raise LockError(msg) from e
                time.sleep(_POLL_INTERVAL)

        logger.debug("Acquired lock %s", lock_path)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
            logger.debug("Released lock %s", lock_path)
