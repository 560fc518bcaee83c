"""
Tests for parameter validation, enums, statistics and logging setup.
"""
import io
import logging
import os

import pytest

from safedupe.core.exceptions import CrossDeviceError, DeduplicationError, InvalidArgument
from safedupe.core.models import (
    DEFAULT_CHUNK_SIZE,
    DeduplicationParams,
    DeduplicationStats,
    DeletionRecord,
    ReplaceMode,
    Stage,
)
from safedupe.utils.convert_utils import ConvertUtils
from safedupe.utils.log_utils import PACKAGE_LOGGER, setup_logging, verbose_logging


class TestReplaceMode:
    """Test parsing of the replace_with option."""

    def test_parse_strings(self):
        """String values are accepted case-insensitively."""
        assert ReplaceMode.parse("symlink") is ReplaceMode.SYMLINK
        assert ReplaceMode.parse("HardLink") is ReplaceMode.HARDLINK
        assert ReplaceMode.parse("none") is ReplaceMode.NONE

    def test_parse_member_and_none(self):
        """Members pass through, None means delete only."""
        assert ReplaceMode.parse(ReplaceMode.SYMLINK) is ReplaceMode.SYMLINK
        assert ReplaceMode.parse(None) is ReplaceMode.NONE

    @pytest.mark.parametrize("value", ["copy", "", 1, True])
    def test_parse_illegal_values(self, value):
        """Anything else is an argument error."""
        with pytest.raises(InvalidArgument):
            ReplaceMode.parse(value)


class TestDeduplicationParams:
    """Test validation on creation."""

    def test_defaults(self):
        """Destructive, no links, no trash, 1 MiB chunks."""
        params = DeduplicationParams(search_roots=["/data"])
        assert params.dry_run is False
        assert params.replace_with is ReplaceMode.NONE
        assert params.delete_hardlinks is False
        assert params.follow_symlinks is False
        assert params.use_trash is False
        assert params.chunk_size == DEFAULT_CHUNK_SIZE

    def test_single_root_becomes_list(self, temp_dir):
        """A lone string or path is wrapped in a list of strings."""
        assert DeduplicationParams(search_roots="/data").search_roots == ["/data"]
        assert DeduplicationParams(search_roots=temp_dir).search_roots == [os.fspath(temp_dir)]

    def test_replace_with_parsed(self):
        """String values of replace_with become enum members."""
        params = DeduplicationParams(search_roots=["/data"], replace_with="hardlink")
        assert params.replace_with is ReplaceMode.HARDLINK

    @pytest.mark.parametrize("kwargs", [
        {"search_roots": []},
        {"search_roots": [""]},
        {"search_roots": ["/data"], "replace_with": "move"},
        {"search_roots": ["/data"], "chunk_size": 0},
        {"search_roots": ["/data"], "partial_hash_threshold": -1},
    ])
    def test_invalid_params(self, kwargs):
        """Malformed parameters are rejected before any file is touched."""
        with pytest.raises(InvalidArgument):
            DeduplicationParams(**kwargs)


class TestExceptions:
    """Test the error hierarchy."""

    def test_invalid_argument_is_value_error(self):
        """Callers catching ValueError also catch argument errors."""
        assert issubclass(InvalidArgument, ValueError)
        assert issubclass(InvalidArgument, DeduplicationError)

    def test_cross_device_is_os_error(self):
        """Cross-device failures are file system errors."""
        assert issubclass(CrossDeviceError, OSError)


class TestDeduplicationStats:
    """Test statistics bookkeeping."""

    def test_update_stage_accumulates(self):
        """Repeated updates add up."""
        stats = DeduplicationStats()
        stats.update_stage(Stage.FULL.value, 1, 3, 0.5)
        stats.update_stage(Stage.FULL.value, 2, 4, 0.25)
        assert stats.get_stage("full") == {"groups": 3, "files": 7, "time": 0.75}
        assert stats.get_stage("partial") is None

    def test_record_deletion_counts_bytes(self, temp_dir, make_descriptor):
        """Separate copies reclaim their size; hard links left in place are found but not deleted."""
        (temp_dir / "a").write_bytes(b"12345")
        (temp_dir / "b").write_bytes(b"12345")
        os.link(temp_dir / "a", temp_dir / "c")
        a, b, c = (make_descriptor(temp_dir / name) for name in ("a", "b", "c"))

        stats = DeduplicationStats()
        stats.record_deletion(DeletionRecord(deleted=b, kept=a))
        stats.record_deletion(DeletionRecord(deleted=c, kept=a))

        assert stats.duplicates_found == 2
        assert stats.files_deleted == 1
        assert stats.bytes_reclaimed == 5

    def test_record_deletion_dry_run(self, temp_dir, make_descriptor):
        """Nothing counts as deleted under dry_run."""
        (temp_dir / "a").write_bytes(b"12345")
        (temp_dir / "b").write_bytes(b"12345")
        a, b = make_descriptor(temp_dir / "a"), make_descriptor(temp_dir / "b")

        stats = DeduplicationStats()
        stats.record_deletion(DeletionRecord(deleted=b, kept=a), dry_run=True)

        assert stats.duplicates_found == 1
        assert stats.files_deleted == 0
        assert stats.bytes_reclaimed == 0

    def test_record_deletion_removed_hardlink(self, temp_dir, make_descriptor):
        """A removed hard link counts as deleted but frees no space, unless it was re-linked."""
        (temp_dir / "a").write_bytes(b"12345")
        os.link(temp_dir / "a", temp_dir / "c")
        record = DeletionRecord(deleted=make_descriptor(temp_dir / "c"), kept=make_descriptor(temp_dir / "a"))

        stats = DeduplicationStats()
        stats.record_deletion(record, delete_hardlinks=True)
        stats.record_deletion(record, delete_hardlinks=True, replace_with=ReplaceMode.HARDLINK)

        assert stats.duplicates_found == 2
        assert stats.files_deleted == 1
        assert stats.bytes_reclaimed == 0

    def test_print_summary(self):
        """Summary lists totals and only the stages that did something."""
        stats = DeduplicationStats(files_indexed=10, duplicates_found=3, files_deleted=2, bytes_reclaimed=2048)
        for stage in Stage.get_all():
            stats.update_stage(stage.value, 0, 0, 0.0)
        stats.update_stage(Stage.SIZE.value, 2, 10, 0.0)

        summary = stats.print_summary()
        assert "Files Indexed: 10" in summary
        assert "Duplicates Found: 3" in summary
        assert "Files Deleted: 2 (2.00KB reclaimed)" in summary
        assert "Size Groups: 2 / 10" in summary
        assert "Partial Hash Groups" not in summary


class TestBytesToHuman:
    """Test size formatting for summaries."""

    def test_units(self):
        """Binary units with two decimals."""
        assert ConvertUtils.bytes_to_human(0) == "0.00B"
        assert ConvertUtils.bytes_to_human(1536) == "1.50KB"
        assert ConvertUtils.bytes_to_human(3 * 1024 * 1024) == "3.00MB"

    def test_negative(self):
        """Negative sizes are shown as zero."""
        assert ConvertUtils.bytes_to_human(-1) == "0B"


class TestSetupLogging:
    """Test the diagnostic handler on the package logger."""

    def test_verbose_shows_info(self):
        """INFO records reach the stream in verbose mode, with the standard format."""
        stream = io.StringIO()
        setup_logging(verbose=True, stream=stream)
        logging.getLogger("safedupe.core.scanner").info("hello")

        assert stream.getvalue() == "INFO     | safedupe.core.scanner     | hello\n"

    def test_quiet_hides_info(self):
        """Without verbose only warnings and worse get through."""
        stream = io.StringIO()
        setup_logging(stream=stream)
        logger = logging.getLogger("safedupe.commands")
        logger.info("progress")
        logger.warning("careful")

        assert "progress" not in stream.getvalue()
        assert "careful" in stream.getvalue()

    def test_repeated_setup_does_not_stack_handlers(self):
        """Calling setup twice leaves exactly one diagnostic handler."""
        first, second = io.StringIO(), io.StringIO()
        setup_logging(verbose=True, stream=first)
        setup_logging(verbose=True, stream=second)
        logging.getLogger("safedupe").info("once")

        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1
        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1


class TestVerboseLogging:
    """Test the diagnostic handler scoped to a single block."""

    def test_info_only_inside_block(self):
        """INFO gets through inside the block; afterwards the logger is as it was."""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        previous_level = package_logger.level
        stream = io.StringIO()

        with verbose_logging(stream=stream):
            logging.getLogger("safedupe.core.scanner").info("inside")
        logging.getLogger("safedupe.core.scanner").info("outside")

        assert stream.getvalue() == "INFO     | safedupe.core.scanner     | inside\n"
        assert package_logger.handlers == []
        assert package_logger.level == previous_level

    def test_restored_after_error(self):
        """An exception inside the block still removes the handler."""
        stream = io.StringIO()

        with pytest.raises(RuntimeError):
            with verbose_logging(stream=stream):
                raise RuntimeError("boom")
        logging.getLogger("safedupe").info("later")

        assert logging.getLogger(PACKAGE_LOGGER).handlers == []
        assert stream.getvalue() == ""
