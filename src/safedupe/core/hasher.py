"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements streaming 32-bit checksums over FileDescriptor content.

Checksums here are partition keys only. Collisions are expected and harmless:
equality is always proven byte-for-byte before anything is deleted.
"""
import logging
import zlib

import xxhash

from safedupe.core.interfaces import HashAlgorithm, HashState, Hasher
from safedupe.core.models import DEFAULT_CHUNK_SIZE, FileDescriptor

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other checksum algorithm
class XXHash32AlgorithmImpl(HashAlgorithm):
    name = "xxh32"

    def new(self) -> HashState:
        return xxhash.xxh32()


class _Crc32State:
    def __init__(self):
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def intdigest(self) -> int:
        return self._value & 0xFFFFFFFF


class CRC32AlgorithmImpl(HashAlgorithm):
    name = "crc32"

    def new(self) -> HashState:
        return _Crc32State()


class HasherImpl(Hasher):
    """
    A hasher that supports any algorithm via the HashAlgorithm interface.
    Reads files in fixed-size blocks; I/O errors propagate to the caller.
    """

    def __init__(self, algorithm: HashAlgorithm = None, buffer_size: int = DEFAULT_CHUNK_SIZE):
        self.algorithm = algorithm or XXHash32AlgorithmImpl()
        self.buffer_size = buffer_size

    def compute_partial_hash(self, file: FileDescriptor, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """Checksum of the first `chunk_size` bytes of a file."""
        result = self._hash_file(file, limit=chunk_size)
        logger.debug(f"Partial {self.algorithm.name} of {file.real_path}: {result:08x}")
        return result

    def compute_full_hash(self, file: FileDescriptor) -> int:
        """Checksum of the whole file."""
        result = self._hash_file(file)
        logger.debug(f"Full {self.algorithm.name} of {file.real_path}: {result:08x}")
        return result

    def _hash_file(self, file: FileDescriptor, limit: int = None) -> int:
        state = self.algorithm.new()
        remaining = limit
        with open(file.real_path, "rb") as f:
            while remaining is None or remaining > 0:
                size = self.buffer_size if remaining is None else min(self.buffer_size, remaining)
                data = f.read(size)
                if not data:
                    break
                state.update(data)
                if remaining is not None:
                    remaining -= len(data)
        return state.intdigest()
