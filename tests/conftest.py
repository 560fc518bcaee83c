"""
Shared fixtures for safedupe tests.
Creates isolated temporary directories with controlled test files.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from safedupe.core.models import FileDescriptor
from safedupe.utils.log_utils import PACKAGE_LOGGER


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dedup_tree(temp_dir) -> Dict[str, Path]:
    """
    Two directories of small files plus symbolic links:
    - dir1/file1..file3: "dup 1" (three identical copies)
    - dir1/file4: "nodup" (same size as "dup 1", different content)
    - dir1/file5, dir1/file6: "dup two" (identical pair)
    - dir1/file7, dir1/file8: "unique", "unique2"
    - dir2/file1..file4: two real CRC-32 collision pairs (only the second pair is same-size)
    - dir2/file5, dir2/file6 -> file2 and dir2/file7 -> file5 (symbolic links, never indexed)
    12 regular files in total.
    """
    dir1 = temp_dir / "dir1"
    dir2 = temp_dir / "dir2"
    dir1.mkdir()
    dir2.mkdir()

    contents = {
        "dir1/file1": b"dup 1",
        "dir1/file2": b"dup 1",
        "dir1/file3": b"dup 1",
        "dir1/file4": b"nodup",
        "dir1/file5": b"dup two",
        "dir1/file6": b"dup two",
        "dir1/file7": b"unique",
        "dir1/file8": b"unique2",
        "dir2/file1": b"MAHAVFT (CRC32 collision)",
        "dir2/file2": b"VJM (CRC32 collision)",
        "dir2/file3": b"KSETVMW (CRC32 collision 2)",
        "dir2/file4": b"XNGMFOX (CRC32 collision 2)",
    }
    files = {"root": temp_dir, "dir1": dir1, "dir2": dir2}
    for name, content in contents.items():
        path = temp_dir / name
        path.write_bytes(content)
        files[name] = path

    for link, target in (("dir2/file5", "file2"), ("dir2/file6", "file2"), ("dir2/file7", "file5")):
        path = temp_dir / link
        os.symlink(target, path)
        files[link] = path

    return files


@pytest.fixture
def make_descriptor() -> Callable[[Path], FileDescriptor]:
    """Builds a FileDescriptor for an existing file, rooted at its parent directory."""
    def _make(path: Path) -> FileDescriptor:
        real_path = os.path.realpath(path)
        dir_name = os.path.dirname(real_path)
        return FileDescriptor(
            start=str(path.parent),
            real_start=dir_name,
            rel_path=os.path.basename(real_path),
            real_path=real_path,
            dir_name=dir_name,
            dir_inode=os.stat(dir_name).st_ino,
            base_name=os.path.basename(real_path),
            stat=os.stat(real_path),
        )
    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers attached by setup_logging() so they never outlive a test's captured stream."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
