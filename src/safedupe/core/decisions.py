"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/decisions.py
Ready-made decision functions.

A decision function answers "should `a` be deleted in favour of `b`?" and must
never answer True for both (a, b) and (b, a). False both ways means "no
preference": neither file is deleted in favour of the other.
"""
import os
from typing import Iterable, List, Union

from safedupe.core.interfaces import DecisionFunction
from safedupe.core.models import FileDescriptor


def _is_inside(path: str, directories: List[str]) -> bool:
    normalized_path = os.path.normpath(path)
    for directory in directories:
        if normalized_path.startswith(directory + os.sep) or normalized_path == directory:
            return True
    return False


def prefer_keep_in(directories: Iterable[Union[str, os.PathLike]]) -> DecisionFunction:
    """
    Files inside `directories` are kept; copies elsewhere are deleted in their favour.
    Two files on the same side of the boundary get no preference.
    """
    resolved = [os.path.normpath(os.path.realpath(d)) for d in directories]

    def decide(a: FileDescriptor, b: FileDescriptor) -> bool:
        return _is_inside(b.real_path, resolved) and not _is_inside(a.real_path, resolved)

    return decide


def prefer_shortest_path(a: FileDescriptor, b: FileDescriptor) -> bool:
    """
    Keep the file closest to the file system root (fewest path components),
    ties broken by the lexicographically smaller path.
    """
    depth_a = a.real_path.rstrip(os.sep).count(os.sep)
    depth_b = b.real_path.rstrip(os.sep).count(os.sep)
    return (depth_b, b.real_path) < (depth_a, a.real_path)


def prefer_oldest(a: FileDescriptor, b: FileDescriptor) -> bool:
    """Keep the file with the older modification time; equal times give no preference."""
    return b.mtime < a.mtime


def first_of(*decisions: DecisionFunction) -> DecisionFunction:
    """
    Combine decision functions lexicographically: the first one with an
    opinion on the pair (True in either direction) decides.
    """
    def decide(a: FileDescriptor, b: FileDescriptor) -> bool:
        for decision in decisions:
            if decision(a, b):
                return True
            if decision(b, a):
                return False
        return False

    return decide
