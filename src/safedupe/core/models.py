"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file indexing, duplicate resolution and safe deletion.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Union

from safedupe.core.exceptions import InvalidArgument
from safedupe.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class ReplaceMode(Enum):
    """
    What to leave behind at the path of a deleted duplicate.
    """
    NONE = "none"
    SYMLINK = "symlink"
    HARDLINK = "hardlink"

    @property
    def display_name(self) -> str:
        """Human-readable name for log output."""
        mapping = {
            ReplaceMode.NONE: "Delete only",
            ReplaceMode.SYMLINK: "Replace with symbolic link",
            ReplaceMode.HARDLINK: "Replace with hard link",
        }
        return mapping.get(self, self.value)

    @classmethod
    def parse(cls, value: Union["ReplaceMode", str, None]) -> "ReplaceMode":
        """Accepts a member, its string value, or None (meaning NONE)."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidArgument(f"Illegal value for replace_with: {value!r}")

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SIZE = "size"
    PARTIAL = "partial"
    FULL = "full"
    RESOLVE = "resolve"

    @classmethod
    def get_all(cls):
        return [cls.SIZE, cls.PARTIAL, cls.FULL, cls.RESOLVE]


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileDescriptor:
    """
    One regular file on disk and how it was reached.

    `start` is the search root as given by the caller, `real_start` the same
    root with symbolic links resolved, `rel_path` the path relative to
    `real_start`. `stat` is taken from the file itself (never from a link).
    """
    start: str
    real_start: str
    rel_path: str
    real_path: str
    dir_name: str
    dir_inode: int
    base_name: str
    stat: os.stat_result = field(repr=False, compare=False)

    @property
    def device(self) -> int:
        return self.stat.st_dev

    @property
    def inode(self) -> int:
        return self.stat.st_ino

    @property
    def size(self) -> int:
        return self.stat.st_size

    @property
    def mtime(self) -> float:
        return self.stat.st_mtime

    def __repr__(self):
        return f"<FileDescriptor path={self.real_path}, size={self.size}>"


class DeletionRecord(NamedTuple):
    """A confirmed (or, under dry-run, would-be) deletion."""
    deleted: FileDescriptor
    kept: FileDescriptor


# ======================
#  Parameters
# ======================

DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass
class DeduplicationParams:
    """Options for one deduplication run, validated on creation."""
    search_roots: List[str]
    dry_run: bool = False
    verbose: bool = False
    replace_with: ReplaceMode = ReplaceMode.NONE
    delete_hardlinks: bool = False
    follow_symlinks: bool = False
    use_trash: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE
    partial_hash_threshold: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.search_roots, (str, os.PathLike)):
            self.search_roots = [self.search_roots]
        self.search_roots = [os.fspath(root) for root in self.search_roots]

        if not self.search_roots:
            raise InvalidArgument("At least one search root is required")
        if any(not root for root in self.search_roots):
            raise InvalidArgument("Search roots cannot be empty")

        self.replace_with = ReplaceMode.parse(self.replace_with)

        if self.chunk_size < 1:
            raise InvalidArgument("Chunk size must be positive")
        if self.partial_hash_threshold < 0:
            raise InvalidArgument("Partial hash threshold cannot be negative")


# ======================
#  Statistics
# ======================

@dataclass
class DeduplicationStats:
    """
    Statistics collected during one deduplication run.
    """
    total_time: float = 0.0
    files_indexed: int = 0
    duplicates_found: int = 0
    files_deleted: int = 0
    bytes_reclaimed: int = 0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def record_deletion(
            self,
            record: DeletionRecord,
            dry_run: bool = False,
            delete_hardlinks: bool = False,
            replace_with: ReplaceMode = ReplaceMode.NONE
    ) -> None:
        """
        Counts a confirmed duplicate. It only counts as deleted when the run
        really removed it: never under dry_run, and for hard-linked pairs only
        with delete_hardlinks (without hard link replacement). Hard-linked pairs
        share their data and reclaim nothing.
        """
        self.duplicates_found += 1
        if dry_run:
            return

        deleted, kept = record
        hardlinked = (deleted.device, deleted.inode) == (kept.device, kept.inode)
        if hardlinked and not (delete_hardlinks and replace_with is not ReplaceMode.HARDLINK):
            return

        self.files_deleted += 1
        if not hardlinked:
            self.bytes_reclaimed += deleted.size

    def get_stage(self, stage_name: str) -> Optional[Dict[str, Union[int, float]]]:
        return self.stage_stats.get(stage_name)

    def print_summary(self) -> str:
        labels = {
            Stage.SIZE.value: "Size Groups",
            Stage.PARTIAL.value: "Partial Hash Groups",
            Stage.FULL.value: "Full Hash Groups",
            Stage.RESOLVE.value: "Resolved Groups",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files Indexed: {self.files_indexed}",
            f"Duplicates Found: {self.duplicates_found}",
            f"Files Deleted: {self.files_deleted} "
            f"({ConvertUtils.bytes_to_human(self.bytes_reclaimed)} reclaimed)\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            if data["groups"] > 0 or data["time"] > 0:
                lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)
