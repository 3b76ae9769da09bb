"""
Helpers for turning operator input into a folder selection.
"""

from __future__ import annotations

from typing import Sequence

from foldersync.core.errors import InvalidSelectionError
from foldersync.core.models import FolderDescriptor


def select_all(missing: Sequence[FolderDescriptor]) -> list[FolderDescriptor]:
    """Auto mode: every missing folder is selected."""
    return list(missing)


def parse_selection(text: str, count: int) -> list[int]:
    """
    Parse comma-separated 1-based folder numbers.

    Args:
        text: Operator input, e.g. "1, 3,5"
        count: Number of listed folders

    Returns:
        0-based indices in input order. Blank input selects nothing.

    Raises:
        InvalidSelectionError: For a non-numeric token or one outside [1, count]
    """
    if not text.strip():
        return []

    indices = []
    for token in text.split(','):
        token = token.strip()
        if not (token.isascii() and token.isdigit()):
            raise InvalidSelectionError(token, count)

        number = int(token)
        if number < 1 or number > count:
            raise InvalidSelectionError(token, count)

        indices.append(number - 1)

    return indices


def pick(missing: Sequence[FolderDescriptor], indices: Sequence[int]) -> list[FolderDescriptor]:
    """Return the folders at the given 0-based indices."""
    return [missing[i] for i in indices]


def folder_depth(folder: FolderDescriptor) -> int:
    """Nesting level for indented listings (top-level folders are 0)."""
    return folder.depth - 1
