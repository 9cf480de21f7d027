"""Temporary staging of a single local file for one transfer."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

STAGING_PREFIX: str = "sharepointio-"


@contextmanager
def staged_file(suffix: str = "", *, dir: Optional[str] = None) -> Iterator[str]:
    """
    Yield a unique local file path and remove the file on exit.

    The file is created empty (so the name is reserved) and deleted on every
    exit path, including codec and transfer failures. Nothing is retried.

    Args:
        suffix: File extension including the dot (e.g. ".csv").
        dir: Optional directory for the staged file (default: system temp dir).
    """
    fd, local_path = tempfile.mkstemp(suffix=suffix, prefix=STAGING_PREFIX, dir=dir)
    os.close(fd)
    logger.debug("Staged local file", extra={"local_path": local_path})
    try:
        yield local_path
    finally:
        _release(local_path)


def _release(local_path: str) -> None:
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
    logger.debug("Released staged file", extra={"local_path": local_path})
