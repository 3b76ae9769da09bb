"""
Shared fixtures and helpers for the folder-sync test suite.
"""

from pathlib import Path

import pytest

from foldersync.core.models import FolderDescriptor


def make_tree(root: Path, folders: list[str], files: list[str] = ()) -> Path:
    """Create folders (and empty files) under root, given as '/'-separated paths."""
    root.mkdir(parents=True, exist_ok=True)
    for rel in folders:
        root.joinpath(*rel.split("/")).mkdir(parents=True, exist_ok=True)
    for rel in files:
        path = root.joinpath(*rel.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return root


def descriptor(rel: str, root: str = "/source") -> FolderDescriptor:
    """Build a FolderDescriptor without touching the filesystem."""
    return FolderDescriptor(
        name=rel.split("/")[-1],
        absolute_path=Path(root).joinpath(*rel.split("/")),
        relative_path=rel,
    )


def snapshot(root: Path) -> set[str]:
    """Every path under root, relative and '/'-separated."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


@pytest.fixture(scope="session")
def qapp():
    """Qt core application shared by the worker tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
