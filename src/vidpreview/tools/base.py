"""
Base classes for media engine wrappers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ToolResult:
    """Result from running an engine subprocess."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    error: str | None = None
    timed_out: bool = False

    @classmethod
    def from_error(cls, error: str, timed_out: bool = False) -> "ToolResult":
        """Create a failed result from an error message."""
        return cls(success=False, error=error, returncode=-1, timed_out=timed_out)

    @classmethod
    def ok(cls, stdout: str = "", stderr: str = "") -> "ToolResult":
        """Create a successful result."""
        return cls(success=True, stdout=stdout, stderr=stderr, returncode=0)

    def describe(self) -> str:
        """Short failure description for logs and exception messages."""
        if self.error:
            return self.error
        lines = [line for line in self.stderr.strip().splitlines() if line.strip()]
        if lines:
            return lines[-1]
        return f"exit code {self.returncode}"


class MediaTool(ABC):
    """Abstract base class for external media engine executables."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name for logging and error messages."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tool is installed and available."""
        pass

    @abstractmethod
    def get_path(self) -> str:
        """Get the path to the tool executable."""
        pass
