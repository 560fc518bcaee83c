"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Error taxonomy for duplicate resolution and safe deletion.
Plain OSError (permission denied, missing file) is never wrapped: it propagates as is.
"""


class DeduplicationError(Exception):
    """Base class for all errors raised by safedupe."""


class InvalidArgument(DeduplicationError, ValueError):
    """Malformed call: empty path, illegal option value, file compared to itself."""


class PreconditionViolation(DeduplicationError):
    """The file to delete is a symbolic link."""


class CrossDeviceError(DeduplicationError, OSError):
    """Hard link replacement requested across file systems."""


class InvariantViolation(DeduplicationError):
    """
    The kept file vanished after its duplicate was deleted.
    Never caught inside the package: processing must stop.
    """
