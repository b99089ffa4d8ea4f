"""
Preview clip quality presets.
"""

# Each preset fixes a target bitrate and output scale for the re-encode
CLIP_QUALITY_PRESETS: dict[str, dict] = {
    "low": {
        "bitrate": "500k",
        "width": 640,
        "height": 360,
    },
    "medium": {
        "bitrate": "1000k",
        "width": 854,
        "height": 480,
    },
    "high": {
        "bitrate": "2000k",
        "width": 1280,
        "height": 720,
    },
}

# Ordered list of presets (lowest to highest)
CLIP_QUALITY_LADDER: list[str] = ["low", "medium", "high"]


def get_clip_preset(quality: str) -> dict:
    """Return the preset for a quality name.

    Raises:
        ValueError: If the quality name is unknown
    """
    try:
        return CLIP_QUALITY_PRESETS[quality]
    except KeyError:
        raise ValueError(
            f"Invalid quality '{quality}'. Must be one of: {', '.join(CLIP_QUALITY_LADDER)}"
        ) from None
