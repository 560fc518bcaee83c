"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashState / HashAlgorithm: Streaming 32-bit checksum (xxHash32, CRC-32, ...).
- Hasher: Interface for computing partial and full checksums of indexed files.
- Walker: The directory traversal collaborator (os.walk compatible).
- FileIndexer: Interface for building the deduplicated set of file descriptors.
- DecisionFunction: Caller-supplied preference predicate (a, b) -> delete a in favour of b?
"""

from typing import Callable, Dict, Iterator, List, Optional, Protocol, Tuple

from safedupe.core.models import FileDescriptor

# (base_name, dir_inode, device)
FileId = Tuple[str, int, int]

# Returns True iff the first file should be deleted in favour of the second.
# Must never return True for both (a, b) and (b, a).
DecisionFunction = Callable[[FileDescriptor, FileDescriptor], bool]

# Callable yielding (dirpath, dirnames, filenames) for every visited directory.
Walker = Callable[..., Iterator[Tuple[str, List[str], List[str]]]]


class HashState(Protocol):
    """Running checksum fed chunk by chunk."""
    def update(self, data: bytes) -> None: ...
    def intdigest(self) -> int: ...


class HashAlgorithm(Protocol):
    """
    Interface for streaming checksum algorithms.

    Allows plugging in different checksums like xxHash32 or CRC-32
    without affecting the rest of the deduplication logic.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh checksum state."""
        ...


class Hasher(Protocol):
    """Interface for hashing part or all of a file's content."""
    def compute_partial_hash(self, file: FileDescriptor, chunk_size: int) -> int: ...
    def compute_full_hash(self, file: FileDescriptor) -> int: ...


class FileIndexer(Protocol):
    """
    Interface for walking search roots and collecting file descriptors.
    """
    def index(self, idx: Optional[Dict[FileId, FileDescriptor]] = None) -> List[FileDescriptor]:
        """
        Walk every configured root.

        Args:
            idx: Optional mapping shared between runs; entries are overwritten
                 when the same directory entry is reached again.

        Returns:
            The merged descriptors (order not significant).
        """
        ...
