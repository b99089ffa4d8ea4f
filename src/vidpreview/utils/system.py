"""
System utilities for finding executables.
"""

import os
import shutil
import sys
from pathlib import Path


def find_tool(name: str, env_var: str | None = None) -> str:
    """Find executable, checking an override variable and the venv first.

    Args:
        name: Tool name (e.g., "ffmpeg", "ffprobe")
        env_var: Environment variable holding an explicit executable path

    Returns:
        Path to executable
    """
    if env_var:
        override = os.environ.get(env_var)
        if override:
            return override

    # Check venv bin directory first
    venv = Path(sys.prefix) / "bin" / name
    if venv.exists():
        return str(venv)

    # Fall back to system PATH
    return shutil.which(name) or name
