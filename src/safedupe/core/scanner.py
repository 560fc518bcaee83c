"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Builds the index of regular files found under one or more search roots.
Features:
- Recursively walks each root through a pluggable os.walk-style walker
- Never indexes symbolic links (the link itself is skipped, its target may still be found)
- Collapses files reached through overlapping or aliased roots into one descriptor,
  keyed by (name, directory inode, device); the last one reached wins
"""

import logging
import os
import stat
import time
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from safedupe.core.identity import file_id
from safedupe.core.interfaces import FileId, FileIndexer, Walker
from safedupe.core.models import FileDescriptor

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


def walk_tree(top: str, followlinks: bool = False) -> Iterator[Tuple[str, List[str], List[str]]]:
    """os.walk that surfaces unreadable directories instead of silently skipping them."""
    return os.walk(top, onerror=_raise_walk_error, followlinks=followlinks)


class FileIndexerImpl(FileIndexer):
    """
    Walks search roots and produces one FileDescriptor per regular file.

    Attributes:
        roots: Search roots as given by the caller
        follow_symlinks: Descend into symbolically linked directories
        walker: Traversal collaborator yielding (dirpath, dirnames, filenames)
    """

    def __init__(
        self,
        roots: Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]],
        follow_symlinks: bool = False,
        walker: Walker = walk_tree
    ):
        if isinstance(roots, (str, os.PathLike)):
            roots = [roots]
        self.roots = [os.fspath(root) for root in roots]
        self.follow_symlinks = follow_symlinks
        self.walker = walker

    def index(self, idx: Optional[Dict[FileId, FileDescriptor]] = None) -> List[FileDescriptor]:
        if idx is None:
            idx = {}

        start_time = time.time()
        for start in self.roots:
            self._index_root(start, idx)

        logger.debug(f"Indexing finished in {time.time() - start_time:.2f} seconds")
        logger.info(f"Indexed {len(idx)} files under {len(self.roots)} search root(s)")
        return list(idx.values())

    def _index_root(self, start: str, idx: Dict[FileId, FileDescriptor]) -> None:
        real_start = os.path.realpath(start)

        if not os.path.exists(real_start):
            error_msg = f"Directory does not exist: {start}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)
        if not os.path.isdir(real_start):
            error_msg = f"Not a directory: {start}"
            logger.error(error_msg)
            raise NotADirectoryError(error_msg)

        logger.debug(f"Walking {start} (resolved to {real_start})")

        for root, dirs, files in self.walker(real_start, followlinks=self.follow_symlinks):
            dir_inode = os.stat(root).st_ino
            for filename in files:
                descriptor = self._describe(start, real_start, root, dir_inode, filename)
                if descriptor is not None:
                    idx[file_id(descriptor)] = descriptor

    @staticmethod
    def _describe(
        start: str,
        real_start: str,
        root: str,
        dir_inode: int,
        filename: str
    ) -> Optional[FileDescriptor]:
        """
        Build the descriptor for one directory entry, or None for symbolic links
        and anything that is not a regular file.
        """
        path = os.path.join(root, filename)

        if os.path.islink(path):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        real_path = os.path.realpath(path)
        file_stat = os.stat(real_path)

        if not stat.S_ISREG(file_stat.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        return FileDescriptor(
            start=start,
            real_start=real_start,
            rel_path=os.path.relpath(path, real_start),
            real_path=real_path,
            dir_name=os.path.dirname(real_path),
            dir_inode=dir_inode,
            base_name=filename,
            stat=file_stat,
        )


def index_files(
    roots: Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]],
    idx: Optional[Dict[FileId, FileDescriptor]] = None,
    follow_symlinks: bool = False,
    walker: Walker = walk_tree
) -> List[FileDescriptor]:
    """Index one root or several; pass `idx` to merge into an existing index."""
    return FileIndexerImpl(roots, follow_symlinks=follow_symlinks, walker=walker).index(idx)
