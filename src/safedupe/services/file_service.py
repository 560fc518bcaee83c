"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
The only code path in safedupe that removes files.

delete_duplicate_file() re-checks identity and content right before acting,
so a wrong preference from the caller's decision function can at worst leave
a duplicate in place, never destroy a unique file.
"""
import logging
import os
import secrets
from typing import Union

from send2trash import send2trash

from safedupe.core.comparator import identical_files
from safedupe.core.exceptions import (
    CrossDeviceError,
    InvalidArgument,
    InvariantViolation,
    PreconditionViolation,
)
from safedupe.core.identity import is_hardlink, same_file
from safedupe.core.models import ReplaceMode

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_TEMP_SUFFIX = ".safedupe-tmp"
_TEMP_ATTEMPTS = 16


class FileService:
    """
    File mutations used by the resolver: delete, trash, replace with links.
    """

    @staticmethod
    def delete_duplicate_file(
        *,
        delete: PathLike = "",
        keep: PathLike = "",
        dry_run: bool = False,
        replace_with: Union[ReplaceMode, str, None] = ReplaceMode.NONE,
        delete_hardlinks: bool = False,
        use_trash: bool = False
    ) -> bool:
        """
        Delete `delete` if, and only if, it is an identical copy of `keep`.

        Keyword-only, so the file to keep can never be confused with the one to delete.

        Returns True when the two files are confirmed duplicates (byte-identical
        or hard links to the same inode), whether or not anything was removed;
        False when the files differ or are the same directory entry.

        Args:
            delete: File to remove. Must not be a symbolic link.
            keep: File that must survive. May be a symbolic link.
            dry_run: Report only, never touch the file system.
            replace_with: Leave a symbolic or hard link to `keep` at `delete`'s path.
            delete_hardlinks: Also remove `delete` when it is a hard link to `keep`
                              (frees a directory entry but no space).
            use_trash: Move `delete` to the system trash instead of unlinking it.

        Raises:
            InvalidArgument: Empty path or illegal replace_with value.
            PreconditionViolation: `delete` is a symbolic link.
            CrossDeviceError: Hard link replacement across file systems.
            InvariantViolation: `keep` disappeared after the deletion.
            OSError: Any I/O failure while checking or deleting.
        """
        delete = os.fspath(delete) if delete is not None else ""
        keep = os.fspath(keep) if keep is not None else ""
        if not delete or not keep:
            raise InvalidArgument("Missing file name")
        if os.path.islink(delete):
            raise PreconditionViolation(f"The file to delete must not be a symbolic link: {delete}")
        replace_with = ReplaceMode.parse(replace_with)

        # Follow symlinks now, so a link that changes between comparing and deleting can't fool us
        delete = os.path.realpath(delete)
        keep = os.path.realpath(keep)

        if replace_with is ReplaceMode.HARDLINK and os.stat(delete).st_dev != os.stat(keep).st_dev:
            raise CrossDeviceError(f"Cannot create hard links across file systems: {delete} -> {keep}")

        if same_file(delete, keep):
            logger.debug(f"Same directory entry, nothing to delete: {delete}")
            return False

        hardlinked = is_hardlink(delete, keep)

        if not hardlinked and not identical_files(delete, keep):
            logger.debug(f"Not identical, keeping both: {delete} / {keep}")
            return False

        mutate = not hardlinked or (delete_hardlinks and replace_with is not ReplaceMode.HARDLINK)

        if dry_run:
            if mutate:
                logger.info(f"[dry-run] Would delete {delete} (duplicate of {keep})")
        elif mutate:
            FileService._remove_and_replace(delete, keep, replace_with, use_trash)
            if replace_with is ReplaceMode.NONE:
                logger.info(f"Deleted {delete} (duplicate of {keep})")
            else:
                logger.info(f"Replaced {delete} with a {replace_with.value} to {keep}")
        else:
            logger.info(f"Hard link to {keep} left in place: {delete}")

        # Deleting one path must never take the other with it. If it did,
        # the file system model is wrong and nothing else can be trusted.
        if not os.path.isfile(keep):
            logger.critical(f"Deleting {delete} somehow removed {keep}")
            raise InvariantViolation(f"Deleting {delete} somehow removed {keep}")

        return True

    @staticmethod
    def _remove_and_replace(delete: str, keep: str, replace_with: ReplaceMode, use_trash: bool) -> None:
        if use_trash:
            FileService.move_to_trash(delete)
            FileService._make_link(keep, delete, replace_with)
            return

        if replace_with is ReplaceMode.NONE:
            os.remove(delete)
            return

        # Build the link beside the target under a name nobody else owns, then swap it in atomically
        temp_path = FileService._make_temp_link(keep, delete, replace_with)
        try:
            os.replace(temp_path, delete)
        except OSError:
            os.remove(temp_path)
            raise

    @staticmethod
    def _make_temp_link(target: str, beside: str, replace_with: ReplaceMode) -> str:
        """
        Create a link to `target` in the directory of `beside` and return its path.
        os.symlink and os.link never overwrite, so an existing entry is only ever
        skipped, never touched.
        """
        directory, name = os.path.split(beside)
        for _ in range(_TEMP_ATTEMPTS):
            temp_path = os.path.join(directory, f".{name}.{secrets.token_hex(4)}{_TEMP_SUFFIX}")
            try:
                FileService._make_link(target, temp_path, replace_with)
            except FileExistsError:
                logger.debug(f"Temporary name taken, retrying: {temp_path}")
                continue
            return temp_path
        raise FileExistsError(f"No free temporary name next to {beside}")

    @staticmethod
    def _make_link(target: str, link_path: str, replace_with: ReplaceMode) -> None:
        if replace_with is ReplaceMode.SYMLINK:
            os.symlink(target, link_path)
        elif replace_with is ReplaceMode.HARDLINK:
            os.link(target, link_path)

    @staticmethod
    def move_to_trash(file_path: PathLike) -> None:
        """Moves a file to the system trash."""
        path = os.fspath(file_path)

        if not os.path.lexists(path):
            raise FileNotFoundError(f"File not found: {path}")

        send2trash(path)
