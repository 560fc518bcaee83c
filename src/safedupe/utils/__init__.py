from .convert_utils import ConvertUtils
from .log_utils import setup_logging, verbose_logging

__all__ = ["ConvertUtils", "setup_logging", "verbose_logging"]
