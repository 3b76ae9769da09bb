"""
Workers for folder comparison and creation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from foldersync.workers.base_worker import BaseWorker
from foldersync.core.folder.comparer import CompareOptions, CompareProgress, FolderComparer
from foldersync.core.folder.sync import FolderSync, SyncOptions
from foldersync.core.models import (
    FolderCompareResult,
    FolderDescriptor,
    SyncProgress,
    SyncResult,
)


class FolderDiffWorker(BaseWorker):
    """
    Worker that scans both trees and finds the missing folders.

    Result is a FolderCompareResult.
    """

    # Signal emitted for each subtree that could not be scanned
    warning_found = pyqtSignal(str, str)  # (path, message)

    def __init__(
        self,
        source_path: str | Path,
        target_path: str | Path,
        options: Optional[CompareOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.source_path = Path(source_path)
        self.target_path = Path(target_path)
        self.options = options or CompareOptions()

    def do_work(self) -> FolderCompareResult:
        """Compare the two trees."""
        self.report_status("Comparing folders...")

        def compare_progress(progress: CompareProgress) -> None:
            # Total is unknown while scanning
            self.report_progress(progress.folders_found, 0, progress.current_path)

        result = FolderComparer(self.options).compare(
            self.source_path,
            self.target_path,
            compare_progress
        )

        for warning in result.warnings:
            self.warning_found.emit(warning.path, warning.message)

        self.report_status(f"{len(result.missing)} missing folder(s)")
        return result


class MaterializeWorker(BaseWorker):
    """
    Worker for creating folders in the target tree.

    Reports progress for each folder; failures are reported and
    the batch continues.
    """

    # Signal emitted for each processed folder
    folder_processed = pyqtSignal(str, str, bool)  # (relative_path, target_path, succeeded)

    # Signal emitted when a folder could not be created (but continues)
    creation_error = pyqtSignal(str, str)  # (path, error)

    def __init__(
        self,
        folders: Sequence[FolderDescriptor],
        target_root: str | Path,
        options: Optional[SyncOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.folders = list(folders)
        self.target_root = Path(target_root)
        self.options = options or SyncOptions()

    def do_work(self) -> SyncResult:
        """Create the folders."""
        if self.options.dry_run:
            self.report_status("Previewing folder creation...")
        else:
            self.report_status("Creating folders...")

        def progress_callback(progress: SyncProgress) -> None:
            self.report_progress(
                progress.items_completed,
                progress.total_items,
                progress.current_item
            )
            self.folder_processed.emit(
                progress.current_item,
                str(progress.target_path),
                progress.succeeded
            )

        result = FolderSync(self.options).execute(
            self.folders,
            self.target_root,
            progress_callback
        )

        for error in result.errors:
            self.creation_error.emit(error.path, error.message)

        self.report_status(result.summary())
        return result
