"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

commands.py
Orchestrates one deduplication run: index → size → partial hash → full hash → resolve.
Every call builds its working set from scratch; nothing is kept between runs.
"""
import logging
import time
from contextlib import nullcontext
from typing import List, Optional, Tuple

from safedupe.core.exceptions import InvalidArgument
from safedupe.core.hasher import HasherImpl
from safedupe.core.interfaces import DecisionFunction, Hasher, Walker
from safedupe.core.models import DeduplicationParams, DeduplicationStats, DeletionRecord, Stage
from safedupe.core.resolver import DuplicateResolver
from safedupe.core.scanner import FileIndexerImpl, walk_tree
from safedupe.core.stages import FullHashStage, PartialHashStage, SizeStage
from safedupe.utils.log_utils import verbose_logging

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Runs the whole pipeline for one set of parameters.

    Usage:
        params = DeduplicationParams(search_roots=["/photos", "/backup"], dry_run=True)
        records, stats = DeduplicationCommand().execute(params, prefer_keep_in(["/photos"]))
        print(stats.print_summary())
    """

    def __init__(self, hasher: Optional[Hasher] = None, walker: Walker = walk_tree):
        self.hasher = hasher
        self.walker = walker

    def execute(
            self,
            params: DeduplicationParams,
            decide: DecisionFunction
    ) -> Tuple[List[DeletionRecord], DeduplicationStats]:
        """
        Execute deduplication with given parameters.

        Args:
            params: Validated deduplication parameters
            decide: (a, b) -> True iff a should be deleted in favour of b

        Returns:
            Tuple of (deletion records, statistics)

        Raises:
            InvalidArgument: If `decide` is not callable
            InvariantViolation: If a kept file vanished; the run stops immediately
            OSError: If a file cannot be read, stat'ed or deleted
        """
        if not callable(decide):
            raise InvalidArgument("Decision function must be callable")

        # Diagnostics only for the duration of this run
        with verbose_logging() if params.verbose else nullcontext():
            return self._run(params, decide)

    def _run(
            self,
            params: DeduplicationParams,
            decide: DecisionFunction
    ) -> Tuple[List[DeletionRecord], DeduplicationStats]:
        stats = DeduplicationStats()
        for stage in Stage.get_all():
            stats.update_stage(stage.value, 0, 0, 0.0)
        total_start_time = time.time()

        logger.info(
            f"Deduplicating {', '.join(params.search_roots)}"
            f"{' (dry run)' if params.dry_run else ''}; {params.replace_with.display_name}"
        )

        try:
            files = FileIndexerImpl(
                params.search_roots,
                follow_symlinks=params.follow_symlinks,
                walker=self.walker
            ).index()
            stats.files_indexed = len(files)

            pipeline = self._build_pipeline(params, decide, stats)
            records = pipeline.process(files)
        except OSError as e:
            logger.exception(f"Deduplication aborted: {e}")
            raise

        stats.total_time = time.time() - total_start_time
        deleted = "nothing deleted (dry run)" if params.dry_run else f"{stats.files_deleted} deleted"
        logger.info(f"Found {stats.duplicates_found} duplicate(s), {deleted}, in {stats.total_time:.2f}s")
        logger.debug(stats.print_summary())
        return records, stats

    def _build_pipeline(
            self,
            params: DeduplicationParams,
            decide: DecisionFunction,
            stats: DeduplicationStats
    ) -> SizeStage:
        """Wires the stages back to front: resolver ← full ← partial ← size."""
        hasher = self.hasher or HasherImpl(buffer_size=params.chunk_size)
        resolver = DuplicateResolver(decide, params)
        full_stage = FullHashStage(hasher, resolver, stats)
        partial_stage = PartialHashStage(hasher, full_stage, stats, chunk_size=params.chunk_size)
        return SizeStage(partial_stage, full_stage, stats, threshold=params.partial_hash_threshold)
