"""
Output layout and bundle record storage.
"""

from vidpreview.storage.layout import OutputLayout, artifact_name
from vidpreview.storage.records import find_latest_bundle, load_bundle, save_bundle

__all__ = [
    "OutputLayout",
    "artifact_name",
    "find_latest_bundle",
    "load_bundle",
    "save_bundle",
]
