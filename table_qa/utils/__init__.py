"""
Utility modules for table-qa.
Provides common functionality for logging, file I/O, and numeric parsing.
"""

from .logging_utils import setup_logger, get_logger, attach_file_handler
from .file_utils import load_config, iter_csv_rows
from .stats_utils import parse_numeric, format_decimal, format_count

__all__ = [
    'setup_logger',
    'get_logger',
    'attach_file_handler',
    'load_config',
    'iter_csv_rows',
    'parse_numeric',
    'format_decimal',
    'format_count',
]
