"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/identity.py
Identity and aliasing checks between files.

Two search roots may alias each other through symbolic links (or bind mounts),
so the same directory entry can show up under different paths. Deleting one of
those paths deletes "both", which is why such pairs must never be treated as a
file and its backup copy.
"""
import os
from typing import Union

from safedupe.core.interfaces import FileId
from safedupe.core.models import FileDescriptor

PathOrDescriptor = Union[str, os.PathLike, FileDescriptor]


def as_path(item: PathOrDescriptor) -> str:
    if isinstance(item, FileDescriptor):
        return item.real_path
    return os.fspath(item)


def file_id(file: FileDescriptor) -> FileId:
    """Key that names one directory entry on one file system."""
    return file.base_name, file.dir_inode, file.device


def same_file(a: PathOrDescriptor, b: PathOrDescriptor) -> bool:
    """
    True iff `a` and `b` refer to the same directory entry.

    The base names must match and the containing directories must be the same
    directory, either textually (after normalization), after resolving symbolic
    links, or by device and inode. If `a` or `b` is itself a symbolic link, the
    link's own directory entry is compared, not its target.
    """
    path_a = as_path(a)
    path_b = as_path(b)

    if os.path.basename(path_a) != os.path.basename(path_b):
        return False

    dir_a = os.path.dirname(os.path.abspath(path_a))
    dir_b = os.path.dirname(os.path.abspath(path_b))

    if os.path.normpath(dir_a) == os.path.normpath(dir_b):
        return True
    if os.path.realpath(dir_a) == os.path.realpath(dir_b):
        return True

    stat_a = os.stat(dir_a)
    stat_b = os.stat(dir_b)
    return stat_a.st_dev == stat_b.st_dev and stat_a.st_ino == stat_b.st_ino


def is_hardlink(a: PathOrDescriptor, b: PathOrDescriptor) -> bool:
    """
    True iff `a` and `b` share device and inode (two names, one data allocation).
    Descriptors are compared by their recorded stat; paths are stat'ed now.
    """
    if isinstance(a, FileDescriptor) and isinstance(b, FileDescriptor):
        return a.device == b.device and a.inode == b.inode

    stat_a = os.stat(as_path(a))
    stat_b = os.stat(as_path(b))
    return stat_a.st_dev == stat_b.st_dev and stat_a.st_ino == stat_b.st_ino
