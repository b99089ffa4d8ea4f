"""
Retention sweeping of generated preview files.

The sweeper only ever touches files in the output directories. It never
shares a lock with pipeline runs; files still being written are protected by
unique timestamped names and by the min_age_seconds grace period.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from vidpreview.config.defaults import (
    RETENTION_DAYS,
    RETENTION_GRACE_SECONDS,
    RETENTION_INITIAL_DELAY,
    RETENTION_INTERVAL,
)
from vidpreview.exceptions import SweepIOError
from vidpreview.models.options import RetentionPolicy
from vidpreview.storage.layout import OutputLayout

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class SweepReport:
    """What a sweep deleted, kept, and failed on."""

    deleted: list[Path] = field(default_factory=list)
    kept: int = 0
    errors: list[SweepIOError] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "deleted": [str(p) for p in self.deleted],
            "kept": self.kept,
            "errors": [str(e) for e in self.errors],
        }


def sweep(
    directories: Iterable[Path],
    max_age_days: float,
    *,
    now: float | None = None,
    min_age_seconds: float = 0.0,
) -> SweepReport:
    """Delete files whose mtime is older than now - max_age_days.

    Per-file and per-directory errors are logged and collected; the sweep
    carries on. Missing directories are skipped. Subdirectories are left
    alone. Running it twice in a row deletes nothing the second time.

    Args:
        directories: Output directories to scan
        max_age_days: Age threshold in days
        now: Reference time (epoch seconds, default: time.time())
        min_age_seconds: Files younger than this are never deleted

    Returns:
        SweepReport
    """
    now = time.time() if now is None else now
    cutoff = min(now - max_age_days * SECONDS_PER_DAY, now - min_age_seconds)
    report = SweepReport()

    for directory in directories:
        directory = Path(directory)
        if not directory.exists():
            logger.debug(f"Skipping missing directory {directory}")
            continue

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            error = SweepIOError(str(directory), f"cannot list directory: {e}")
            logger.warning(f"Failed to sweep directory {directory}: {e}")
            report.errors.append(error)
            continue

        for path in entries:
            try:
                if not path.is_file():
                    continue
                if path.stat().st_mtime >= cutoff:
                    report.kept += 1
                    continue
                path.unlink()
            except FileNotFoundError:
                # Removed concurrently; nothing left to do
                continue
            except OSError as e:
                error = SweepIOError(str(path), str(e))
                logger.warning(f"Failed to delete {path}: {e}")
                report.errors.append(error)
                continue
            report.deleted.append(path)
            logger.info(f"Cleaned up old preview file: {path}")

    return report


def sweep_old_artifacts(
    max_age_days: float = RETENTION_DAYS,
    layout: OutputLayout | None = None,
    *,
    min_age_seconds: float = RETENTION_GRACE_SECONDS,
) -> SweepReport:
    """Sweep every output directory of a layout (default: configured layout)."""
    layout = layout or OutputLayout.from_config()
    report = sweep(
        layout.retention_directories(),
        max_age_days,
        min_age_seconds=min_age_seconds,
    )
    logger.info(
        f"Retention sweep: {len(report.deleted)} deleted, {report.kept} kept, "
        f"{len(report.errors)} errors"
    )
    return report


class RetentionScheduler:
    """Runs sweep_old_artifacts on a background thread.

    First sweep after initial_delay seconds, then one every interval seconds.
    A failing sweep is logged and the schedule continues.
    """

    def __init__(
        self,
        policy: RetentionPolicy | None = None,
        layout: OutputLayout | None = None,
        *,
        interval: float = RETENTION_INTERVAL,
        initial_delay: float = RETENTION_INITIAL_DELAY,
    ):
        self.policy = policy or RetentionPolicy()
        self.layout = layout
        self.interval = interval
        self.initial_delay = initial_delay
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.runs = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            logger.warning("Retention scheduler is already running")
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="vidpreview-retention", daemon=True
        )
        self._thread.start()
        logger.info(
            f"Retention scheduler started (max age {self.policy.max_age_days}d, "
            f"every {self.interval:.0f}s)"
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Retention scheduler stopped")

    def run_once(self) -> SweepReport | None:
        """Run one sweep now. Returns None if the sweep itself failed."""
        self.runs += 1
        try:
            return sweep_old_artifacts(
                self.policy.max_age_days,
                self.layout,
                min_age_seconds=self.policy.min_age_seconds,
            )
        except Exception as e:
            logger.exception(f"Retention sweep failed: {e}")
            return None

    def _loop(self) -> None:
        if self._stop.wait(self.initial_delay):
            return
        while True:
            self.run_once()
            if self._stop.wait(self.interval):
                return
