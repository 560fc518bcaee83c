"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Terminal stage of the pipeline: turns a group of suspected duplicates into
concrete delete/keep decisions.

The decision function only orders the group and proposes pairs. Every proposed
pair goes through FileService.delete_duplicate_file, which proves duplication
itself before touching anything.
"""
import logging
from functools import cmp_to_key
from typing import Callable, List, Optional

from safedupe.core.interfaces import DecisionFunction
from safedupe.core.models import DeduplicationParams, DeletionRecord, FileDescriptor
from safedupe.services.file_service import FileService

logger = logging.getLogger(__name__)


def decision_order(decide: DecisionFunction) -> Callable[[FileDescriptor], object]:
    """Sort key placing files the decision function would delete before their partners."""
    def compare(a: FileDescriptor, b: FileDescriptor) -> int:
        if decide(a, b):
            return -1
        if decide(b, a):
            return 1
        return 0
    return cmp_to_key(compare)


class DuplicateResolver:
    """
    Resolves one suspected duplicate group in a single pass.

    After sorting, candidates are scanned from the front. For candidate i the
    partner is searched from the end of the active window down to i + 1; the
    first partner that the decision function prefers and that the deletion
    primitive confirms is recorded, and the window shrinks to end at that
    partner. Candidates without a confirmed partner are left alone.
    """

    def __init__(
        self,
        decide: DecisionFunction,
        params: DeduplicationParams,
        delete_file: Optional[Callable[..., bool]] = None
    ):
        self.decide = decide
        self.params = params
        self.delete_file = delete_file or FileService.delete_duplicate_file

    def resolve(self, group: List[FileDescriptor]) -> List[DeletionRecord]:
        files = sorted(group, key=decision_order(self.decide))
        records: List[DeletionRecord] = []

        bound = len(files) - 1
        i = 0
        while i < bound:
            candidate = files[i]
            j = bound
            while j > i:
                partner = files[j]
                if self.decide(candidate, partner) and self._delete(candidate, partner):
                    records.append(DeletionRecord(deleted=candidate, kept=partner))
                    bound = j
                    break
                j -= 1
            i += 1

        if records:
            logger.debug(f"Resolved {len(records)} of {len(files)} file(s) in group")
        return records

    def _delete(self, candidate: FileDescriptor, partner: FileDescriptor) -> bool:
        return self.delete_file(
            delete=candidate.real_path,
            keep=partner.real_path,
            dry_run=self.params.dry_run,
            replace_with=self.params.replace_with,
            delete_hardlinks=self.params.delete_hardlinks,
            use_trash=self.params.use_trash,
        )
