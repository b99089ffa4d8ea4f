"""
Text formatting utilities.
"""

import re

_UNSAFE_CHARS_RE = re.compile(r"[^\w-]")
_MAX_ID_LEN = 60


def sanitize_id(value: str) -> str:
    """Sanitize a source identifier for use inside filenames.

    Args:
        value: Raw identifier

    Returns:
        Identifier with unsafe characters replaced by "_", truncated
    """
    cleaned = _UNSAFE_CHARS_RE.sub("_", value)[:_MAX_ID_LEN]
    return cleaned or "source"


def format_duration(seconds: float | None) -> str | None:
    """Format seconds as human-readable duration string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "1:30" or "1:05:30"), or None
    """
    if seconds is None:
        return None

    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_size(num_bytes: int) -> str:
    """Format a byte count as a short human-readable string."""
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}GB"
