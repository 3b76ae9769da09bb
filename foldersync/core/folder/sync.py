"""
Folder materialization engine.

Creates the selected folders under the target root with:
- Ancestors-first processing in the given order
- Preview (dry run) mode
- Per-folder progress reporting
- Per-folder error isolation (one failure never stops the batch)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from foldersync.core.models import (
    CreationError,
    FolderDescriptor,
    SyncProgress,
    SyncResult,
)


@dataclass
class SyncOptions:
    """Options for materialization."""
    dry_run: bool = False  # Don't actually make changes
    verbose: bool = False  # Log every created folder at INFO


class FolderSync:
    """
    Creates missing folders in a target tree.

    Folders are processed strictly in the order given; callers pass
    the output of resolve_closure so parents come before children.
    """

    def __init__(self, options: Optional[SyncOptions] = None):
        self.options = options or SyncOptions()

    def execute(
        self,
        folders: Sequence[FolderDescriptor],
        target_root: Path | str | None,
        progress_callback: Optional[Callable[[SyncProgress], None]] = None
    ) -> SyncResult:
        """
        Create each folder under target_root.

        Args:
            folders: Ordered folders to create
            target_root: Root of the target tree
            progress_callback: Called after each folder is processed

        Returns:
            SyncResult with created/error counts

        Raises:
            ValueError: If target_root is not set
        """
        if target_root is None or str(target_root) == '':
            raise ValueError("target_root must be set")

        start_time = time.time()

        target_root = Path(target_root)
        dry_run = self.options.dry_run

        created_count = 0
        errors: list[CreationError] = []
        planned: list[Path] = []
        total_items = len(folders)

        if dry_run:
            logging.info(f"FolderSync - Dry run: {total_items} folder(s) would be created")
        else:
            logging.info(f"FolderSync - Creating {total_items} folder(s) under {target_root}")

        for i, folder in enumerate(folders):
            dest_path = folder.target_path(target_root)
            planned.append(dest_path)
            succeeded = True

            if dry_run:
                logging.debug(f"FolderSync - Would create {dest_path}")
            else:
                try:
                    dest_path.mkdir(parents=True, exist_ok=True)
                    created_count += 1
                    if self.options.verbose:
                        logging.info(f"FolderSync - Created {dest_path}")
                    else:
                        logging.debug(f"FolderSync - Created {dest_path}")
                except (OSError, ValueError) as e:
                    succeeded = False
                    message = getattr(e, 'strerror', None) or str(e)
                    errors.append(CreationError(path=str(dest_path), message=message))
                    logging.warning(f"FolderSync - Error creating {dest_path}: {e}")

            if progress_callback:
                progress_callback(SyncProgress(
                    current_item=folder.relative_path,
                    items_completed=i + 1,
                    total_items=total_items,
                    target_path=dest_path,
                    succeeded=succeeded,
                    dry_run=dry_run,
                ))

        result = SyncResult(
            created_count=created_count,
            error_count=len(errors),
            errors=errors,
            planned=planned,
            dry_run=dry_run,
            duration=time.time() - start_time,
        )
        logging.info(f"FolderSync - {result.summary()}")

        return result


def materialize(
    folders: Sequence[FolderDescriptor],
    target_root: Path | str | None,
    dry_run: bool = False,
    progress_callback: Optional[Callable[[SyncProgress], None]] = None
) -> SyncResult:
    """Create folders under target_root; see FolderSync.execute."""
    return FolderSync(SyncOptions(dry_run=dry_run)).execute(
        folders, target_root, progress_callback
    )
