"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Definitive byte-for-byte comparison of two files.

Checksums only partition candidates; this is the proof of equality that the
deletion primitive relies on. Both files are streamed in lock-step through two
reusable buffers, so memory use is bounded by 2 * buffer_size.
"""
import logging
import os
from typing import BinaryIO

from safedupe.core.exceptions import InvalidArgument
from safedupe.core.identity import PathOrDescriptor, as_path, same_file
from safedupe.core.models import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


def _read_full(stream: BinaryIO, view: memoryview) -> int:
    """Fill `view` from `stream`; returns less than len(view) only at end of file."""
    total = 0
    size = len(view)
    while total < size:
        n = stream.readinto(view[total:])
        if not n:
            break
        total += n
    return total


def identical_streams(a: BinaryIO, b: BinaryIO, buffer_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """Compare two open binary files from their current positions to the end."""
    if buffer_size < 1:
        raise InvalidArgument(f"Buffer size must be positive, got {buffer_size}")

    if os.fstat(a.fileno()).st_size != os.fstat(b.fileno()).st_size:
        return False

    view_a = memoryview(bytearray(buffer_size))
    view_b = memoryview(bytearray(buffer_size))
    while True:
        n_a = _read_full(a, view_a)
        n_b = _read_full(b, view_b)
        if n_a != n_b:
            return False
        if n_a == 0:
            return True
        if view_a[:n_a] != view_b[:n_b]:
            return False


def identical_files(a: PathOrDescriptor, b: PathOrDescriptor, buffer_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """
    Determine if two files are byte-for-byte identical.

    Raises InvalidArgument if `a` and `b` are the same directory entry: comparing
    a file to itself is never needed and means something upstream went wrong.
    Files of different size are reported different without being opened.
    """
    if same_file(a, b):
        raise InvalidArgument(f"Cannot compare a file to itself: {as_path(a)}")

    path_a = as_path(a)
    path_b = as_path(b)

    if os.stat(path_a).st_size != os.stat(path_b).st_size:
        logger.debug(f"Size mismatch: {path_a} vs {path_b}")
        return False

    with open(path_a, "rb") as fa, open(path_b, "rb") as fb:
        result = identical_streams(fa, fb, buffer_size=buffer_size)

    logger.debug(f"Compared {path_a} and {path_b}: {'identical' if result else 'different'}")
    return result
