"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Generic "group by key, then recurse" combinator used by every pipeline stage.
"""

import logging
from itertools import groupby
from operator import itemgetter
from typing import Any, Callable, List, Sequence, TypeVar

from safedupe.core.exceptions import InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def group_runs(items: Sequence[T], by: Callable[[T], Any]) -> List[List[T]]:
    """
    Partition `items` into groups of equal `by` value, keeping only groups of 2+.

    Each key is computed exactly once. Items are stable-sorted by key and split
    into maximal runs of equal keys, so keys must be mutually orderable
    (sizes and integer checksums are). Within a group, input order is preserved.
    """
    keyed = [(by(item), index, item) for index, item in enumerate(items)]
    keyed.sort(key=itemgetter(0, 1))

    groups = []
    for _, run in groupby(keyed, key=itemgetter(0)):
        group = [item for _, _, item in run]
        if len(group) >= 2:  # Avoid groups with less than 2 files
            groups.append(group)
    return groups


def process_dups(
    items: Sequence[T],
    by: Callable[[T], Any],
    proc: Callable[[List[T]], List[R]],
    single_pair: bool = False
) -> List[R]:
    """
    Group `items` by `by` and concatenate `proc(group)` over every group of 2+.

    Args:
        items: Candidates to partition
        by: Key function; keys are compared for equality
        proc: Called once per group of two or more members, returns a list
        single_pair: Fast path for input known to hold exactly one pair:
                     skips grouping and hands both items to `proc` directly

    Returns:
        Concatenated results; no ordering across groups is implied.
    """
    if single_pair:
        if len(items) != 2:
            raise InvalidArgument(f"single_pair expects exactly 2 items, got {len(items)}")
        return list(proc(list(items)))

    groups = group_runs(items, by)
    logger.debug(f"{len(groups)} candidate group(s) among {len(items)} item(s)")

    results: List[R] = []
    for group in groups:
        results.extend(proc(group))
    return results
