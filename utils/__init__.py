"""Utility modules for the meaning-pivot pipeline.

This package provides logging configuration, path helpers and string manipulation shared by
all pipeline stages.
"""

from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

__all__: list[str] = ["FileUtils", "LoggerUtils", "StringUtils"]
