"""
JSON records for generated preview bundles.

Each bundle is saved as {records_dir}/{bundle.id}.json so a later lookup by
source id returns exact thumbnail offsets and sizes instead of reconstructing
them from artifact filenames.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from vidpreview.exceptions import RecordError
from vidpreview.models.bundle import PreviewBundle

logger = logging.getLogger(__name__)


def save_bundle(bundle: PreviewBundle, records_dir: Path) -> Path:
    """Save a bundle record to JSON.

    Args:
        bundle: Bundle to save
        records_dir: Directory holding records

    Returns:
        Path of the written record

    Raises:
        RecordError: If save fails
    """
    record_file = records_dir / f"{bundle.id}.json"
    tmp_file = record_file.with_suffix(".json.tmp")
    try:
        records_dir.mkdir(parents=True, exist_ok=True)
        tmp_file.write_text(json.dumps(bundle.to_dict(), indent=2))
        tmp_file.replace(record_file)
    except OSError as e:
        raise RecordError(f"Failed to save record {record_file}: {e}") from e
    return record_file


def load_bundle(record_file: Path) -> PreviewBundle:
    """Load a bundle record from JSON.

    Raises:
        RecordError: If the file is missing or cannot be parsed
    """
    try:
        data = json.loads(record_file.read_text())
        return PreviewBundle.from_dict(data)
    except json.JSONDecodeError as e:
        raise RecordError(f"Invalid record {record_file}: {e}") from e
    except (OSError, KeyError, TypeError, ValueError) as e:
        raise RecordError(f"Failed to load record {record_file}: {e}") from e


def find_latest_bundle(source_id: str, records_dir: Path) -> PreviewBundle | None:
    """Return the most recent bundle recorded for a source.

    References to artifacts that have since been swept are dropped from the
    returned bundle. Unreadable records are skipped with a warning.

    Args:
        source_id: Source identifier the bundle was generated for
        records_dir: Directory holding records

    Returns:
        Latest PreviewBundle, or None if no record exists
    """
    if not records_dir.is_dir():
        return None

    latest: PreviewBundle | None = None
    for record_file in records_dir.glob("*.json"):
        try:
            bundle = load_bundle(record_file)
        except RecordError as e:
            logger.warning(f"Skipping record: {e}")
            continue
        if bundle.source_id != source_id:
            continue
        if latest is None or bundle.created_at > latest.created_at:
            latest = bundle

    if latest is None:
        return None
    return latest.without_missing_files()
