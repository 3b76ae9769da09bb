"""
Main entry point for the folder-sync command.

This module handles:
- Command line argument parsing
- Logging configuration
- Exception handling
- The interactive sync flow: scan, list, select, confirm, create
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO

from foldersync import __version__
from foldersync.core.errors import InvalidSelectionError, PathNotFoundError
from foldersync.core.folder.closure import resolve_closure
from foldersync.core.folder.comparer import CompareOptions, FolderComparer
from foldersync.core.folder.sync import FolderSync, SyncOptions
from foldersync.core.models import FolderDescriptor, SyncProgress, SyncResult
from foldersync.core.selection import folder_depth, parse_selection, pick, select_all
from foldersync.services.settings import SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "folder-sync"
APP_VERSION = __version__


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    source_path: str = ""
    target_path: str = ""
    dry_run: bool = False
    verbose: bool = False
    auto: bool = False
    config_file: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None


class OperationAborted(Exception):
    """Raised when the run cannot continue (e.g. target refused)."""
    pass


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console output is reserved for the listing and prompts
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """Logs unhandled exceptions before the process exits."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Sync folder structures between source and target directories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ./project ./backup            Pick missing folders interactively
  %(prog)s -a ./project ./backup         Create every missing folder
  %(prog)s -d ./project ./backup         Preview without creating anything
        """
    )

    parser.add_argument('source', help='Source directory path')
    parser.add_argument('target', help='Target directory path')

    parser.add_argument(
        '-d', '--dry-run',
        action='store_true',
        help='Preview changes without executing'
    )
    parser.add_argument(
        '-a', '--auto',
        action='store_true',
        help='Auto-create all missing folders without prompting'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path (default: ./sync-config.json)'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show detailed output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write the log to this file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.source_path = parsed.source
    result.target_path = parsed.target
    result.dry_run = parsed.dry_run
    result.verbose = parsed.verbose
    result.auto = parsed.auto
    result.config_file = parsed.config
    result.log_file = parsed.log_file
    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


# =============================================================================
# Terminal Output
# =============================================================================

class Colors:
    """ANSI colors for terminal output."""

    CYAN = '\033[36m'
    YELLOW = '\033[33m'
    GREEN = '\033[32m'
    MAGENTA = '\033[35m'
    BLUE = '\033[34m'
    WHITE = '\033[37m'
    RED = '\033[31m'
    GRAY = '\033[90m'
    RESET = '\033[0m'

    DEPTH_CYCLE = (CYAN, YELLOW, GREEN, MAGENTA, BLUE, WHITE)

    @classmethod
    def for_depth(cls, depth: int) -> str:
        return cls.DEPTH_CYCLE[depth % len(cls.DEPTH_CYCLE)]


# =============================================================================
# Sync Flow
# =============================================================================

class FolderSyncCLI:
    """
    Interactive sync flow around the engine.

    The engine never blocks; every prompt happens here, between
    the diff and the closure, and between the closure and creation.
    """

    def __init__(
        self,
        args: CommandLineArgs,
        input_func: Callable[[str], str] = input,
        stream: Optional[TextIO] = None
    ):
        self.args = args
        self._input = input_func
        self._stream = stream or sys.stdout
        self._use_colors = hasattr(self._stream, 'isatty') and self._stream.isatty()

    # -------------------------------------------------------------------------
    # Output helpers
    # -------------------------------------------------------------------------

    def echo(self, message: str = "", color: str = "") -> None:
        if color and self._use_colors:
            message = f"{color}{message}{Colors.RESET}"
        print(message, file=self._stream)

    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask a yes/no question; empty input picks the default."""
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._input(f"{message} [{hint}] ").strip().lower()
            if not answer:
                return default
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            self.echo("Please answer 'y' or 'n'.", Colors.YELLOW)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def run(self) -> int:
        """Execute the full flow. Returns the exit code."""
        source_path = Path(self.args.source_path)
        target_path = Path(self.args.target_path)

        self.echo("Validating paths...", Colors.BLUE)
        if not source_path.is_dir():
            raise PathNotFoundError(source_path, "Source directory does not exist")

        self._ensure_target(target_path)

        config = SettingsManager(self.args.config_file).config

        self.echo("Scanning source and target directories...", Colors.BLUE)
        compare_result = FolderComparer(
            CompareOptions(exclude_patterns=config.exclusions)
        ).compare(source_path, target_path)

        for warning in compare_result.warnings:
            self.echo(f"Warning: {warning}", Colors.YELLOW)

        missing = compare_result.missing
        if not missing:
            self.echo("All folders are already synchronized!", Colors.GREEN)
            return 0

        self.print_missing(missing)

        if self.args.auto:
            selected = select_all(missing)
            self.echo("\nAuto mode: all missing folders will be created", Colors.BLUE)
        else:
            selected = self.select_folders(missing)

        if not selected:
            self.echo("No folders selected. Exiting...", Colors.YELLOW)
            return 0

        final_selection = resolve_closure(selected, missing)

        if not self.args.auto:
            self.echo("\nFolders to be created:", Colors.CYAN)
            for i, folder in enumerate(final_selection, start=1):
                self.echo(f"  {i}. {folder.target_path(target_path)}")

            if not self.confirm(f"Create {len(final_selection)} folder(s)?"):
                self.echo("Operation cancelled.", Colors.YELLOW)
                return 0

        result = self.create_folders(final_selection, target_path)
        self.print_summary(result)
        return 0

    def _ensure_target(self, target_path: Path) -> None:
        """Offer to create a missing target root."""
        if target_path.exists():
            if not target_path.is_dir():
                raise OperationAborted(f"Target is not a directory: {target_path}")
            return

        self.echo(f"Target directory does not exist: {target_path}", Colors.YELLOW)
        if not self.args.auto and not self.confirm("Would you like to create the target directory?"):
            raise OperationAborted("Cannot proceed without target directory")

        if self.args.dry_run:
            self.echo(f"Would create target directory: {target_path}", Colors.BLUE)
        else:
            try:
                target_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OperationAborted(f"Could not create target directory {target_path}: {e}") from e
            logging.info(f"FolderSyncCLI - Created target directory {target_path}")
            self.echo(f"Created target directory: {target_path}", Colors.GREEN)

    def print_missing(self, missing: Sequence[FolderDescriptor]) -> None:
        """List missing folders, numbered from 1 and indented by depth."""
        self.echo(f"\nFound {len(missing)} missing folders in target:", Colors.YELLOW)
        for i, folder in enumerate(missing, start=1):
            depth = folder_depth(folder)
            self.echo(f"{'  ' * depth}[{i}] {folder.relative_path}", Colors.for_depth(depth))

    def select_folders(self, missing: Sequence[FolderDescriptor]) -> list[FolderDescriptor]:
        """Ask for folder numbers until the input is valid. Blank selects every folder."""
        self.echo("\nSelect folders to create:", Colors.CYAN)
        prompt = (
            "Enter folder numbers separated by commas (e.g., 1,3,5), "
            "'all' or blank for all, 'none' to skip: "
        )

        while True:
            text = self._input(prompt).strip()
            if not text or text.lower() == 'all':
                return select_all(missing)
            if text.lower() == 'none':
                return []

            try:
                return pick(missing, parse_selection(text, len(missing)))
            except InvalidSelectionError as e:
                self.echo(str(e), Colors.RED)

    def create_folders(self, folders: Sequence[FolderDescriptor], target_path: Path) -> SyncResult:
        """Run the materializer with per-folder progress output."""
        if self.args.dry_run:
            self.echo("\nDry run - folders that would be created:", Colors.BLUE)
        else:
            self.echo("\nCreating folders...", Colors.BLUE)

        def on_progress(progress: SyncProgress) -> None:
            counter = f"[{progress.items_completed}/{progress.total_items}]"
            if progress.dry_run:
                self.echo(f"  {progress.items_completed}. {progress.target_path}")
            elif not progress.succeeded:
                self.echo(f"{counter} Error creating {progress.target_path}", Colors.RED)
            elif self.args.verbose:
                self.echo(f"{counter} Created: {progress.target_path}", Colors.GREEN)
            else:
                self.echo(f"{counter} {progress.current_item}")

        sync = FolderSync(SyncOptions(dry_run=self.args.dry_run, verbose=self.args.verbose))
        return sync.execute(folders, target_path, on_progress)

    def print_summary(self, result: SyncResult) -> None:
        for error in result.errors:
            self.echo(str(error), Colors.RED)

        self.echo(f"\n{result.summary()}", Colors.RED if result.has_errors else Colors.GREEN)
        if result.dry_run:
            self.echo("This was a dry run - no actual changes were made.", Colors.BLUE)


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_arguments(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = setup_logging(args.log_level, log_file)
    logger.debug(f"Starting {APP_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    try:
        return FolderSyncCLI(args).run()
    except (PathNotFoundError, OperationAborted) as e:
        logger.error(f"Error: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        logger.warning("Operation cancelled by user")
        return 130


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
