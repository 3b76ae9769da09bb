"""
Base worker for running an engine operation from a Qt application.

A worker wraps one synchronous engine call. run() executes it once and
reports the outcome through exactly one of the finished, error or
cancelled signals. Run it directly, or hand it to a WorkerThread to keep
the UI thread free.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt6.QtCore import QMutex, QMutexLocker, QObject, QThread, pyqtSignal, pyqtSlot


class WorkerSignals(QObject):
    """Signals shared by all workers."""

    progress = pyqtSignal(int, int, str)  # (current, total, detail); total is 0 while unknown
    status = pyqtSignal(str)
    started = pyqtSignal()
    finished = pyqtSignal(object)  # result
    error = pyqtSignal(str, str)  # (error type, message)
    cancelled = pyqtSignal()


class BaseWorker(QObject):
    """
    Runs do_work() once and reports the outcome.

    The engine operations have no mid-run cancellation, so cancel() only
    has an effect when it is called before run().
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals(self)
        self._cancelled = False
        self._mutex = QMutex()
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def is_cancelled(self) -> bool:
        with QMutexLocker(self._mutex):
            return self._cancelled

    @property
    def result(self) -> Any:
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """(error type, message) of the failure, if run() failed."""
        return self._error

    def cancel(self) -> None:
        with QMutexLocker(self._mutex):
            self._cancelled = True

    @pyqtSlot()
    def run(self) -> None:
        if self.is_cancelled:
            self.signals.cancelled.emit()
            return

        self.signals.started.emit()

        try:
            result = self.do_work()
        except Exception as e:
            logging.error(f"{type(self).__name__} - {type(e).__name__}: {e}")
            self._error = (type(e).__name__, str(e))
            self.signals.error.emit(*self._error)
            return

        self._result = result
        self.signals.finished.emit(result)

    def do_work(self) -> Any:
        """Perform the operation and return its result."""
        raise NotImplementedError

    def report_progress(self, current: int, total: int, detail: str = "") -> None:
        self.signals.progress.emit(current, total, detail)

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)


class WorkerThread(QThread):
    """
    Runs a worker's run() on a separate thread.

    Usage:
        thread = WorkerThread(FolderDiffWorker(source, target))
        thread.worker.signals.finished.connect(on_finished)
        thread.start()
    """

    def __init__(self, worker: BaseWorker, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.worker = worker

    def run(self) -> None:
        self.worker.run()

    def cancel(self) -> None:
        self.worker.cancel()

    @property
    def result(self) -> Any:
        return self.worker.result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        return self.worker.error
