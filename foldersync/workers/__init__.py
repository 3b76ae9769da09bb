"""
Background workers for embedding the sync engine in a Qt application.

Provides workers for:
- Folder comparison
- Folder creation

All workers use Qt signals for thread-safe communication
with the UI thread.
"""

from foldersync.workers.base_worker import (
    BaseWorker,
    WorkerSignals,
    WorkerThread,
)
from foldersync.workers.sync_worker import (
    FolderDiffWorker,
    MaterializeWorker,
)

__all__ = [
    # Base
    'BaseWorker',
    'WorkerSignals',
    'WorkerThread',
    # Sync
    'FolderDiffWorker',
    'MaterializeWorker',
]
