"""
Folder synchronization module.

Provides functionality for:
- Exclusion pattern matching
- Recursive folder scanning
- Missing folder detection
- Parent folder dependency resolution
- Folder creation
"""

from foldersync.core.folder.matcher import (
    PatternMatcher,
    matches,
)
from foldersync.core.folder.scanner import (
    FolderScanner,
    ScanOptions,
    scan_folders,
)
from foldersync.core.folder.comparer import (
    FolderComparer,
    CompareOptions,
    find_missing,
)
from foldersync.core.folder.closure import (
    resolve_closure,
)
from foldersync.core.folder.sync import (
    FolderSync,
    SyncOptions,
    materialize,
)

__all__ = [
    # Matcher
    'PatternMatcher',
    'matches',
    # Scanner
    'FolderScanner',
    'ScanOptions',
    'scan_folders',
    # Comparer
    'FolderComparer',
    'CompareOptions',
    'find_missing',
    # Closure
    'resolve_closure',
    # Sync
    'FolderSync',
    'SyncOptions',
    'materialize',
]
