"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

api.py
Single-call entry point for the library.
"""
import os
from typing import Iterable, List, Optional, Union

from safedupe.commands import DeduplicationCommand
from safedupe.core.interfaces import DecisionFunction, Hasher
from safedupe.core.models import DeduplicationParams, DeletionRecord, ReplaceMode


def deduplicate(
    search_roots: Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]],
    decision_fn: DecisionFunction,
    *,
    dry_run: bool = False,
    verbose: bool = False,
    replace_with: Union[ReplaceMode, str, None] = ReplaceMode.NONE,
    delete_hardlinks: bool = False,
    follow_symlinks: bool = False,
    use_trash: bool = False,
    hasher: Optional[Hasher] = None
) -> List[DeletionRecord]:
    """
    Find duplicate files under `search_roots` and delete redundant copies.

    `decision_fn(a, b)` returns True iff `a` should be deleted in favour of `b`.
    It only expresses preference: each pair is proven byte-identical (or hard
    linked) immediately before anything is deleted.

    Returns:
        One (deleted, kept) record per deletion, or per would-be deletion with dry_run=True.
    """
    if isinstance(search_roots, (str, os.PathLike)):
        search_roots = [search_roots]

    params = DeduplicationParams(
        search_roots=list(search_roots),
        dry_run=dry_run,
        verbose=verbose,
        replace_with=replace_with,
        delete_hardlinks=delete_hardlinks,
        follow_symlinks=follow_symlinks,
        use_trash=use_trash,
    )
    records, _ = DeduplicationCommand(hasher=hasher).execute(params, decision_fn)
    return records
