"""
safedupe: find duplicate files and safely delete redundant copies.

Core features:
- Multi-stage narrowing: size → partial checksum → full checksum → byte comparison
- Caller-supplied decision function picks which copy goes; it never authorizes deletion on its own
- Every deletion is re-verified right before it happens
- Optional dry run, trash instead of unlink, and symlink/hardlink replacement
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("safedupe")
except Exception:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from safedupe.api import deduplicate
from safedupe.commands import DeduplicationCommand
from safedupe.core import (
    DeduplicationParams, DeduplicationStats, DeletionRecord, FileDescriptor, ReplaceMode,
    DeduplicationError, InvalidArgument, PreconditionViolation, CrossDeviceError, InvariantViolation,
    same_file, is_hardlink, identical_files, index_files, process_dups,
    prefer_keep_in, prefer_shortest_path, prefer_oldest, first_of)
from safedupe.services.file_service import FileService

delete_duplicate_file = FileService.delete_duplicate_file

__all__ = [
    "deduplicate",
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationStats",
    "DeletionRecord",
    "FileDescriptor",
    "ReplaceMode",
    "DeduplicationError",
    "InvalidArgument",
    "PreconditionViolation",
    "CrossDeviceError",
    "InvariantViolation",
    "same_file",
    "is_hardlink",
    "identical_files",
    "index_files",
    "process_dups",
    "delete_duplicate_file",
    "prefer_keep_in",
    "prefer_shortest_path",
    "prefer_oldest",
    "first_of",
    "FileService",
    "__version__",
]
