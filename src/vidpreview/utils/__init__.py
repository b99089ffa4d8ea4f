"""
Utility functions for vidpreview.
"""

from vidpreview.utils.formatting import format_duration, format_size, sanitize_id
from vidpreview.utils.logging import log_timed
from vidpreview.utils.system import find_tool

__all__ = [
    "format_duration",
    "format_size",
    "sanitize_id",
    "log_timed",
    "find_tool",
]
