"""
Exceptions raised by the folder sync engine.

Per-entry scan and creation problems are not exceptions; they are
collected as ScanWarning / CreationError records in the results.
"""

from __future__ import annotations

from pathlib import Path


class PathNotFoundError(FileNotFoundError):
    """Raised when the source root does not exist or is not a directory."""

    def __init__(self, path: Path | str, message: str = "Directory not found"):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class InvalidSelectionError(ValueError):
    """Raised when a manual folder selection cannot be parsed."""

    def __init__(self, token: str, count: int):
        self.token = token
        self.count = count
        super().__init__(
            f"Invalid selection '{token}': "
            f"please enter valid numbers between 1 and {count}"
        )
