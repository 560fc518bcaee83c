"""
Core deduplication engine: indexer, comparator, hasher, grouper, stages and resolver.

This package contains the safety-critical foundation of safedupe:
- FileIndexerImpl: recursive traversal collapsing aliased paths into one descriptor
- same_file / is_hardlink: identity and aliasing checks
- identical_files: streaming byte-for-byte comparison
- HasherImpl + XXHash32AlgorithmImpl / CRC32AlgorithmImpl: 32-bit partial/full checksums
- process_dups: "group by key, then recurse" combinator
- SizeStage / PartialHashStage / FullHashStage / DuplicateResolver: the resolution pipeline
- Models: FileDescriptor, DeletionRecord, DeduplicationParams and statistics
"""

from .exceptions import (
    DeduplicationError, InvalidArgument, PreconditionViolation, CrossDeviceError, InvariantViolation)
from .models import (
    FileDescriptor, DeletionRecord, DeduplicationParams, DeduplicationStats, ReplaceMode, Stage)
from .identity import file_id, same_file, is_hardlink
from .comparator import identical_files, identical_streams
from .hasher import HasherImpl, XXHash32AlgorithmImpl, CRC32AlgorithmImpl
from .scanner import FileIndexerImpl, index_files, walk_tree
from .grouper import group_runs, process_dups
from .resolver import DuplicateResolver, decision_order
from .stages import DeduplicationConfig, SizeStage, PartialHashStage, FullHashStage
from .decisions import prefer_keep_in, prefer_shortest_path, prefer_oldest, first_of

__all__ = [
    "DeduplicationError",
    "InvalidArgument",
    "PreconditionViolation",
    "CrossDeviceError",
    "InvariantViolation",
    "FileDescriptor",
    "DeletionRecord",
    "DeduplicationParams",
    "DeduplicationStats",
    "ReplaceMode",
    "Stage",
    "file_id",
    "same_file",
    "is_hardlink",
    "identical_files",
    "identical_streams",
    "HasherImpl",
    "XXHash32AlgorithmImpl",
    "CRC32AlgorithmImpl",
    "FileIndexerImpl",
    "index_files",
    "walk_tree",
    "group_runs",
    "process_dups",
    "DuplicateResolver",
    "decision_order",
    "DeduplicationConfig",
    "SizeStage",
    "PartialHashStage",
    "FullHashStage",
    "prefer_keep_in",
    "prefer_shortest_path",
    "prefer_oldest",
    "first_of",
]
