"""
Core data models for the folder sync engine.

This module defines the data structures passed between engine stages:
- Folder descriptors produced by a scan
- Scan and creation problem records
- Progress and result models for scanning and materialization

All models are UI-agnostic and live only for the duration of one sync run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional


# Normalized separator for relative paths, independent of the host OS
PATH_SEPARATOR = "/"


# =============================================================================
# Folder Models
# =============================================================================

@dataclass(frozen=True)
class FolderDescriptor:
    """One directory node discovered during a scan."""
    name: str
    absolute_path: Path
    relative_path: str  # Identity key across trees, '/'-separated

    @property
    def parts(self) -> tuple[str, ...]:
        """Path segments of the relative path."""
        return tuple(self.relative_path.split(PATH_SEPARATOR))

    @property
    def depth(self) -> int:
        """Number of path segments (top-level folders have depth 1)."""
        return len(self.parts)

    @property
    def parent_path(self) -> Optional[str]:
        """Relative path of the parent folder, or None at the top level."""
        parts = self.parts
        if len(parts) < 2:
            return None
        return PATH_SEPARATOR.join(parts[:-1])

    def iter_ancestor_paths(self) -> Iterator[str]:
        """Yield every proper ancestor relative path, shallowest first."""
        parts = self.parts
        for i in range(1, len(parts)):
            yield PATH_SEPARATOR.join(parts[:i])

    def target_path(self, target_root: Path | str) -> Path:
        """Location of this folder when recreated under another root."""
        return Path(target_root).joinpath(*self.parts)


# =============================================================================
# Problem Records
# =============================================================================

@dataclass(frozen=True)
class ScanWarning:
    """A subtree that could not be listed. Non-fatal."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"Could not scan {self.path}: {self.message}"


@dataclass(frozen=True)
class CreationError:
    """A single directory that could not be created. Non-fatal."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"Error creating {self.path}: {self.message}"


# =============================================================================
# Scan Models
# =============================================================================

@dataclass
class ScanProgress:
    """Progress information for scanning."""
    current_path: str
    folders_found: int
    warnings: int


@dataclass
class ScanResult:
    """Result of a directory scan."""
    root_path: Path
    folders: list[FolderDescriptor] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    scan_time: float = 0.0

    @property
    def folder_count(self) -> int:
        return len(self.folders)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def relative_paths(self) -> set[str]:
        """Set of all relative paths in this scan."""
        return {folder.relative_path for folder in self.folders}


@dataclass
class FolderCompareResult:
    """Scans of both trees together with the folders missing in the target."""
    source_scan: ScanResult
    target_scan: ScanResult
    missing: list[FolderDescriptor] = field(default_factory=list)
    compare_time: float = 0.0

    @property
    def source_path(self) -> Path:
        return self.source_scan.root_path

    @property
    def target_path(self) -> Path:
        return self.target_scan.root_path

    @property
    def is_synchronized(self) -> bool:
        return not self.missing

    @property
    def warnings(self) -> list[ScanWarning]:
        return self.source_scan.warnings + self.target_scan.warnings


# =============================================================================
# Sync Models
# =============================================================================

@dataclass
class SyncProgress:
    """Progress information reported after each processed folder."""
    current_item: str
    items_completed: int
    total_items: int
    target_path: Path
    succeeded: bool = True
    dry_run: bool = False

    @property
    def percent_items(self) -> float:
        if self.total_items == 0:
            return 0.0
        return (self.items_completed / self.total_items) * 100


@dataclass
class SyncResult:
    """Result of a materialization run."""
    created_count: int = 0
    error_count: int = 0
    errors: list[CreationError] = field(default_factory=list)
    planned: list[Path] = field(default_factory=list)  # Processing order
    dry_run: bool = False
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.error_count == 0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def items_processed(self) -> int:
        return len(self.planned)

    def summary(self) -> str:
        """One-line summary of the run."""
        if self.dry_run:
            return f"Dry run: {len(self.planned)} folder(s) would be created"
        return f"Summary: {self.created_count} created, {self.error_count} errors"
