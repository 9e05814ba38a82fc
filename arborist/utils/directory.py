"""Scoped working-directory changes."""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from arborist.exceptions import ArboristIOError
from arborist.logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def change_directory(path: Union[str, Path]) -> Iterator[Path]:
    """Enter a directory and return to the previous one on every exit path.

    A failure to return is logged as a warning and never replaces the
    outcome of the block.

    Yields:
        Path: The directory that was current before entering

    Raises:
        ArboristIOError: If the current directory cannot be read or changed
    """
    try:
        original = Path(os.getcwd())
        os.chdir(path)
    except OSError as e:
        raise ArboristIOError(f"Failed to change directory to {path}: {e}", e) from e
    logger.debug(f"Changed directory to {path}")

    try:
        yield original
    finally:
        try:
            os.chdir(original)
            logger.debug(f"Restored directory {original}")
        except OSError as e:
            logger.warning(f"Failed to restore original directory {original}: {e}")
