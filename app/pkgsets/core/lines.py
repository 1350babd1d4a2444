"""Line-oriented file rewriting.

Set files are plain text with one entry per line. Edits are expressed as
a per-line transform; the file is only rewritten when the transform
actually changed something, so no-op edits leave modification times alone.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from pkgsets.core.errors import UnreadableSetFileError

logger = logging.getLogger(__name__)

# Returns the replacement line, or None to drop the line
LineTransform = Callable[[str], str | None]


def read_lines(path: Path) -> list[str]:
    """Read a text file into a list of lines without line terminators.

    Args:
        path: File to read.

    Returns:
        Lines in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnreadableSetFileError: If the file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        raise UnreadableSetFileError(path, "not valid UTF-8 text") from e


def rewrite_lines(path: Path, transform: LineTransform) -> bool:
    """Apply a transform to every line of a file, writing only on change.

    Args:
        path: File to rewrite.
        transform: Called with each line (without terminator). Returns the
            replacement line or None to drop it.

    Returns:
        True if the file was rewritten, False if it was left untouched.
    """
    original = read_lines(path)

    updated: list[str] = []
    for line in original:
        result = transform(line)
        if result is not None:
            updated.append(result)

    if updated == original:
        return False

    content = "".join(f"{line}\n" for line in updated)
    path.write_text(content, encoding="utf-8")
    logger.debug("Rewrote %s (%d -> %d lines)", path, len(original), len(updated))
    return True
