"""
Block Sources

Reads ordered data blocks from files for tree construction.
Each file is one block, or is split into fixed-size chunks when a
chunk size is given. Order follows the order of the paths given.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


def iter_file_chunks(path: str | Path, chunk_size: int) -> Iterator[bytes]:
    """
    Yield consecutive chunks of at most chunk_size bytes from a file.

    An empty file yields a single empty block so that it still occupies
    a leaf position.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    with open(path, "rb") as f:
        emitted = False
        while True:
            data = f.read(chunk_size)
            if not data:
                break
            emitted = True
            yield data
        if not emitted:
            yield b""


def read_blocks(paths: Iterable[str | Path], chunk_size: int | None = None) -> list[bytes]:
    """
    Read blocks from a list of files.

    Args:
        paths: Files to read, in leaf order
        chunk_size: Split each file into chunks of this size; None means
                    one block per file

    Returns:
        Ordered list of blocks

    Raises:
        FileNotFoundError: If a path does not exist
    """
    blocks: list[bytes] = []
    for path in paths:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Block file not found: {path}")
        if chunk_size:
            blocks.extend(iter_file_chunks(path, chunk_size))
        else:
            blocks.append(path.read_bytes())

    logger.debug("Read %d blocks from input files", len(blocks))
    return blocks


__all__ = [
    "iter_file_chunks",
    "read_blocks",
]
