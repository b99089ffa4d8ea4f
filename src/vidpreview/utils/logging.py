"""
Progress logging for preview runs.
"""

import logging
import time

logger = logging.getLogger("vidpreview")


def log_timed(
    msg: str,
    start_time: float | None = None,
    *,
    level: int = logging.INFO,
) -> None:
    """Log a progress line prefixed with the run's elapsed time.

    Args:
        msg: Message to log
        start_time: Run start from time.time(), or None for [START]
        level: Logging level, e.g. WARNING for a degraded run
    """
    elapsed = f"[{time.time() - start_time:.1f}s]" if start_time else "[START]"
    logger.log(level, f"{elapsed} {msg}")
