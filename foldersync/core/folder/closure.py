"""
Dependency closure for a partial folder selection.

Selecting a nested folder without its missing parents would leave the
target with an orphaned child. The closure adds every missing ancestor
of each selected folder and orders the result ancestors-first.
"""

from __future__ import annotations

import logging
from typing import Sequence

from foldersync.core.models import FolderDescriptor


def resolve_closure(
    selected: Sequence[FolderDescriptor],
    all_missing: Sequence[FolderDescriptor]
) -> list[FolderDescriptor]:
    """
    Expand a selection with its missing ancestors.

    Args:
        selected: Folders chosen by the operator
        all_missing: Every folder missing in the target (diff output)

    Returns:
        New list containing each selected folder once, plus every ancestor
        found in all_missing, ordered by depth. Equal depths keep the
        discovery order of all_missing.
    """
    missing_by_path = {folder.relative_path: folder for folder in all_missing}

    result: dict[str, FolderDescriptor] = {}
    for folder in selected:
        result.setdefault(folder.relative_path, folder)

    added = 0
    for folder in selected:
        for ancestor_path in folder.iter_ancestor_paths():
            if ancestor_path in result:
                continue

            # Not missing means the ancestor already exists in the target
            ancestor = missing_by_path.get(ancestor_path)
            if ancestor is not None:
                result[ancestor_path] = ancestor
                added += 1

    if added:
        logging.debug(f"resolve_closure - Added {added} missing parent folder(s)")

    discovery_index = {path: i for i, path in enumerate(missing_by_path)}
    fallback = len(discovery_index)

    return sorted(
        result.values(),
        key=lambda f: (f.depth, discovery_index.get(f.relative_path, fallback))
    )
