"""
Directory scanner for folder synchronization.

Enumerates the folders under a root with:
- Depth-first, pre-order traversal (parents before children)
- Exclusion rules evaluated once per entry, before descending
- Error resilience (an unreadable subtree never aborts the scan)
- Symlinked directories followed, with a cycle guard on the descent path
- Progress reporting
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from foldersync.core.errors import PathNotFoundError
from foldersync.core.folder.matcher import PatternMatcher
from foldersync.core.models import (
    PATH_SEPARATOR,
    FolderDescriptor,
    ScanProgress,
    ScanResult,
    ScanWarning,
)


@dataclass
class ScanOptions:
    """Options for directory scanning."""
    exclude_patterns: list[str] = field(default_factory=list)
    follow_symlinks: bool = True


class FolderScanner:
    """
    Scans a directory tree and lists its folders.

    The root itself is never part of the result; only its descendants are.
    Relative paths always use '/' as separator.
    """

    def __init__(self, options: Optional[ScanOptions] = None):
        self.options = options or ScanOptions()
        self._matcher = PatternMatcher(self.options.exclude_patterns)

    @classmethod
    def with_rules(cls, rules: Iterable[str]) -> 'FolderScanner':
        """Create a scanner for the given exclusion rules."""
        return cls(ScanOptions(exclude_patterns=list(rules)))

    def scan(
        self,
        root_path: Path | str,
        progress_callback: Optional[Callable[[ScanProgress], None]] = None
    ) -> ScanResult:
        """
        Scan a directory tree.

        Args:
            root_path: Root directory to scan
            progress_callback: Called after each directory listing

        Returns:
            ScanResult with folders in discovery order and any warnings

        Raises:
            PathNotFoundError: If root_path is missing or not a directory
        """
        start_time = time.time()

        root_path = Path(root_path).resolve()

        if not root_path.exists():
            logging.error(f"FolderScanner - Root path not found: {root_path}")
            raise PathNotFoundError(root_path)

        if not root_path.is_dir():
            logging.error(f"FolderScanner - Root path is not a directory: {root_path}")
            raise PathNotFoundError(root_path, "Not a directory")

        folders: list[FolderDescriptor] = []
        warnings: list[ScanWarning] = []

        # Pending (absolute path, relative path, ancestor identities); '' is the root
        stack: list[tuple[Path, str, frozenset]] = [(root_path, '', frozenset())]

        while stack:
            current_path, current_rel, ancestors = stack.pop()

            if current_rel:
                folders.append(FolderDescriptor(
                    name=current_path.name,
                    absolute_path=current_path,
                    relative_path=current_rel,
                ))

            dir_key = self._directory_key(current_path, current_rel, ancestors, warnings)
            if dir_key is not None:
                children = self._list_children(current_path, current_rel, warnings)
                descent = ancestors | {dir_key}

                # Reverse so the first sibling is popped first
                stack.extend((path, rel, descent) for path, rel in reversed(children))

            if progress_callback:
                progress_callback(ScanProgress(
                    current_path=current_rel,
                    folders_found=len(folders),
                    warnings=len(warnings),
                ))

        scan_time = time.time() - start_time
        logging.debug(
            f"FolderScanner - Scanned {root_path}: {len(folders)} folders, "
            f"{len(warnings)} warnings in {scan_time:.3f}s"
        )

        return ScanResult(
            root_path=root_path,
            folders=folders,
            warnings=warnings,
            scan_time=scan_time,
        )

    def _directory_key(
        self,
        dir_path: Path,
        rel_path: str,
        ancestors: frozenset,
        warnings: list[ScanWarning]
    ) -> Optional[tuple[int, int]]:
        """
        Return the (device, inode) identity of a directory, or None if it
        must not be descended into.

        A directory whose identity is already on the current descent path
        is a symlink cycle: it stays in the result but is not listed.
        """
        try:
            st = os.stat(dir_path)
        except OSError as e:
            display = rel_path or str(dir_path)
            logging.warning(f"FolderScanner - Could not stat {display}: {e}")
            warnings.append(ScanWarning(path=display, message=e.strerror or str(e)))
            return None

        key = (st.st_dev, st.st_ino)
        if key in ancestors:
            logging.warning(f"FolderScanner - Directory cycle at {rel_path}, not descending")
            warnings.append(ScanWarning(path=rel_path, message="Directory cycle detected"))
            return None
        return key

    def _list_children(
        self,
        dir_path: Path,
        rel_path: str,
        warnings: list[ScanWarning]
    ) -> list[tuple[Path, str]]:
        """
        List the included child folders of a directory, in name order.

        A directory that cannot be listed is treated as having no
        children; the problem is appended to warnings.
        """
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            display = rel_path or str(dir_path)
            logging.warning(f"FolderScanner - Could not scan {display}: {e}")
            warnings.append(ScanWarning(path=display, message=e.strerror or str(e)))
            return []

        children: list[tuple[Path, str]] = []

        for entry in entries:
            child_rel = f"{rel_path}{PATH_SEPARATOR}{entry.name}" if rel_path else entry.name

            if self._matcher.matches(entry.name, child_rel):
                logging.debug(f"FolderScanner - Excluded {child_rel}")
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=self.options.follow_symlinks)
            except OSError as e:
                logging.warning(f"FolderScanner - Could not stat {child_rel}: {e}")
                warnings.append(ScanWarning(path=child_rel, message=e.strerror or str(e)))
                continue

            if is_dir:
                children.append((dir_path / entry.name, child_rel))

        return children


def scan_folders(root_path: Path | str, rules: Iterable[str]) -> list[FolderDescriptor]:
    """Scan root_path and return its folders in discovery order."""
    return FolderScanner.with_rules(rules).scan(root_path).folders
