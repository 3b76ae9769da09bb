"""
Folder comparison engine.

Compares the folder structure of a source and a target tree and
identifies the folders that exist only in the source.
Comparison is by relative path; file contents are not considered.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from foldersync.core.folder.scanner import FolderScanner, ScanOptions
from foldersync.core.models import (
    FolderCompareResult,
    FolderDescriptor,
    ScanProgress,
    ScanResult,
)


def find_missing(
    source_folders: Sequence[FolderDescriptor],
    target_folders: Sequence[FolderDescriptor]
) -> list[FolderDescriptor]:
    """
    Return the source folders whose relative path is absent from the target.

    Keeps the source discovery order. Neither input is modified.
    """
    target_paths = {folder.relative_path for folder in target_folders}
    return [folder for folder in source_folders if folder.relative_path not in target_paths]


@dataclass
class CompareOptions:
    """Options for folder comparison."""
    exclude_patterns: list[str] = field(default_factory=list)
    follow_symlinks: bool = True


@dataclass
class CompareProgress:
    """Progress of comparison operation."""
    phase: str  # 'scanning_source', 'scanning_target'
    current_path: str
    folders_found: int


class FolderComparer:
    """
    Compares two folder trees.

    Both trees are scanned with the same exclusion rules, one after
    the other. A target root that does not exist yet is treated as
    an empty tree.
    """

    def __init__(self, options: Optional[CompareOptions] = None):
        self.options = options or CompareOptions()

    def compare(
        self,
        source_path: Path | str,
        target_path: Path | str,
        progress_callback: Optional[Callable[[CompareProgress], None]] = None
    ) -> FolderCompareResult:
        """
        Compare two directories.

        Args:
            source_path: Source directory (must exist)
            target_path: Target directory
            progress_callback: Called with progress updates

        Returns:
            FolderCompareResult with both scans and the missing folders

        Raises:
            PathNotFoundError: If the source directory does not exist
        """
        start_time = time.time()

        scanner = FolderScanner(ScanOptions(
            exclude_patterns=list(self.options.exclude_patterns),
            follow_symlinks=self.options.follow_symlinks,
        ))

        logging.info(f"FolderComparer - Scanning source directory {source_path}")
        source_scan = scanner.scan(
            source_path,
            self._phase_callback('scanning_source', progress_callback)
        )

        target_path = Path(target_path).resolve()
        if target_path.exists():
            logging.info(f"FolderComparer - Scanning target directory {target_path}")
            target_scan = scanner.scan(
                target_path,
                self._phase_callback('scanning_target', progress_callback)
            )
        else:
            logging.info(f"FolderComparer - Target {target_path} does not exist, treating it as empty")
            target_scan = ScanResult(root_path=target_path)

        missing = find_missing(source_scan.folders, target_scan.folders)
        logging.info(
            f"FolderComparer - {len(missing)} of {source_scan.folder_count} "
            f"source folders missing in target"
        )

        return FolderCompareResult(
            source_scan=source_scan,
            target_scan=target_scan,
            missing=missing,
            compare_time=time.time() - start_time,
        )

    @staticmethod
    def _phase_callback(
        phase: str,
        progress_callback: Optional[Callable[[CompareProgress], None]]
    ) -> Optional[Callable[[ScanProgress], None]]:
        """Wrap a compare progress callback for one scan phase."""
        if progress_callback is None:
            return None

        def on_scan_progress(progress: ScanProgress) -> None:
            progress_callback(CompareProgress(
                phase=phase,
                current_path=progress.current_path,
                folders_found=progress.folders_found,
            ))

        return on_scan_progress
