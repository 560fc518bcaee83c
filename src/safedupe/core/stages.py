"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Duplicate-resolution pipeline stages.

STAGE CHAIN
-----------
SizeStage         : groups by size (free, taken from the index); large groups go to
                    PartialHashStage, the rest straight to FullHashStage
PartialHashStage  : groups by a 32-bit checksum of the first chunk only
FullHashStage     : groups by a 32-bit checksum of the whole file, then hands each
                    group to the DuplicateResolver

Every stage is an application of process_dups(): group by a key, drop singletons,
pass each remaining group on. Each stage is strictly cheaper than the next, so
most non-duplicates are discarded before their content is read in full.

Checksums are never treated as proof: a colliding group only costs an extra
byte comparison inside the deletion primitive.
"""
import logging
import time
from typing import Any, Callable, List

from safedupe.core.grouper import process_dups
from safedupe.core.interfaces import Hasher
from safedupe.core.models import (
    DEFAULT_CHUNK_SIZE,
    DeduplicationStats,
    DeletionRecord,
    FileDescriptor,
    Stage,
)
from safedupe.core.resolver import DuplicateResolver

logger = logging.getLogger(__name__)


class DeduplicationConfig:
    CHUNK_SIZE = DEFAULT_CHUNK_SIZE  # Bytes hashed by the partial stage
    PARTIAL_HASH_THRESHOLD = DEFAULT_CHUNK_SIZE  # Files above this size get a partial hash first


class StageBase:
    """
    Shared partitioning and bookkeeping for all stages.
    Key computation time (stat lookup or hashing) is recorded per stage.
    """
    stage: Stage

    def __init__(self, stats: DeduplicationStats):
        self.stats = stats

    def _partition(
        self,
        files: List[FileDescriptor],
        by: Callable[[FileDescriptor], Any],
        proc: Callable[[List[FileDescriptor]], List[DeletionRecord]],
        single_pair: bool = False
    ) -> List[DeletionRecord]:
        key_time = 0.0
        group_count = 0

        def timed_key(file: FileDescriptor) -> Any:
            nonlocal key_time
            start_time = time.perf_counter()
            try:
                return by(file)
            finally:
                key_time += time.perf_counter() - start_time

        def counted_proc(group: List[FileDescriptor]) -> List[DeletionRecord]:
            nonlocal group_count
            group_count += 1
            return proc(group)

        results = process_dups(files, timed_key, counted_proc, single_pair=single_pair)
        self.stats.update_stage(
            stage_name=self.stage.value,
            groups_found=group_count,
            files_processed=len(files),
            duration=key_time
        )
        return results


class FullHashStage(StageBase):
    """Groups by whole-content checksum and resolves every surviving group."""
    stage = Stage.FULL

    def __init__(self, hasher: Hasher, resolver: DuplicateResolver, stats: DeduplicationStats):
        super().__init__(stats)
        self.hasher = hasher
        self.resolver = resolver

    def process(self, group: List[FileDescriptor]) -> List[DeletionRecord]:
        # A lone pair is settled by one byte comparison; hashing both first would read them twice
        if len(group) == 2:
            logger.debug(f"Single pair, skipping full hash: {group[0].real_path}, {group[1].real_path}")
            return self._partition(group, self.hasher.compute_full_hash, self._resolve, single_pair=True)
        return self._partition(group, self.hasher.compute_full_hash, self._resolve)

    def _resolve(self, group: List[FileDescriptor]) -> List[DeletionRecord]:
        start_time = time.perf_counter()
        records = self.resolver.resolve(group)
        params = self.resolver.params
        for record in records:
            self.stats.record_deletion(
                record,
                dry_run=params.dry_run,
                delete_hardlinks=params.delete_hardlinks,
                replace_with=params.replace_with
            )
        self.stats.update_stage(
            stage_name=Stage.RESOLVE.value,
            groups_found=1,
            files_processed=len(group),
            duration=time.perf_counter() - start_time
        )
        return records


class PartialHashStage(StageBase):
    """Groups by a checksum of the leading chunk of each file."""
    stage = Stage.PARTIAL

    def __init__(
        self,
        hasher: Hasher,
        next_stage: FullHashStage,
        stats: DeduplicationStats,
        chunk_size: int = DeduplicationConfig.CHUNK_SIZE
    ):
        super().__init__(stats)
        self.hasher = hasher
        self.next_stage = next_stage
        self.chunk_size = chunk_size

    def process(self, group: List[FileDescriptor]) -> List[DeletionRecord]:
        return self._partition(group, self._partial_hash, self.next_stage.process)

    def _partial_hash(self, file: FileDescriptor) -> int:
        return self.hasher.compute_partial_hash(file, self.chunk_size)


class SizeStage(StageBase):
    """Entry stage: groups the whole index by file size."""
    stage = Stage.SIZE

    def __init__(
        self,
        partial_stage: PartialHashStage,
        full_stage: FullHashStage,
        stats: DeduplicationStats,
        threshold: int = DeduplicationConfig.PARTIAL_HASH_THRESHOLD
    ):
        super().__init__(stats)
        self.partial_stage = partial_stage
        self.full_stage = full_stage
        self.threshold = threshold

    def process(self, files: List[FileDescriptor]) -> List[DeletionRecord]:
        return self._partition(files, _file_size, self._route)

    def _route(self, group: List[FileDescriptor]) -> List[DeletionRecord]:
        if group[0].size > self.threshold:
            return self.partial_stage.process(group)
        return self.full_stage.process(group)


def _file_size(file: FileDescriptor) -> int:
    return file.size
