"""
pytest suite for FolderScanner.

Trees
-----
basic       src/{components/ui,utils} + docs/api + files at every level
excluded    .git/objects, node_modules/lodash, packages/web/node_modules
"""

import os
from pathlib import Path

import pytest

from conftest import make_tree
from foldersync.core.errors import PathNotFoundError
from foldersync.core.folder.comparer import FolderComparer
from foldersync.core.folder.scanner import FolderScanner, ScanOptions, scan_folders

DEFAULT_RULES = [".git", "node_modules", ".DS_Store"]


def rel_paths(folders) -> list[str]:
    return [f.relative_path for f in folders]


# ---------------------------------------------------------------------------
# Basic traversal
#
# basic/
# ├── README.md
# ├── docs/
# │   └── api/
# └── src/
#     ├── index.js
#     ├── components/
#     │   └── ui/
#     └── utils/
# ---------------------------------------------------------------------------

class TestBasicTraversal:

    @pytest.fixture(autouse=True)
    def _tree(self, tmp_path):
        self.root = make_tree(
            tmp_path / "basic",
            ["src/components/ui", "src/utils", "docs/api"],
            ["README.md", "src/index.js", "src/components/ui/button.js"],
        )
        self.folders = scan_folders(self.root, DEFAULT_RULES)

    def test_pre_order_with_sorted_siblings(self):
        assert rel_paths(self.folders) == [
            "docs",
            "docs/api",
            "src",
            "src/components",
            "src/components/ui",
            "src/utils",
        ]

    def test_root_not_emitted(self):
        assert "" not in rel_paths(self.folders)
        assert "." not in rel_paths(self.folders)

    def test_files_not_emitted(self):
        assert not any(p.endswith((".md", ".js")) for p in rel_paths(self.folders))

    def test_descriptor_fields(self):
        ui = self.folders[4]
        assert ui.name == "ui"
        assert ui.relative_path == "src/components/ui"
        assert ui.absolute_path == self.root.resolve() / "src" / "components" / "ui"
        assert ui.depth == 3

    def test_relative_paths_unique(self):
        paths = rel_paths(self.folders)
        assert len(paths) == len(set(paths))

    def test_parents_precede_children(self):
        seen = set()
        for folder in self.folders:
            if folder.parent_path is not None:
                assert folder.parent_path in seen
            seen.add(folder.relative_path)


# ---------------------------------------------------------------------------
# Exclusion
# ---------------------------------------------------------------------------

class TestExclusion:

    @pytest.fixture(autouse=True)
    def _tree(self, tmp_path):
        self.root = make_tree(
            tmp_path / "excluded",
            [
                ".git/objects/ab",
                "node_modules/lodash",
                "packages/web/node_modules/react",
                "packages/web/src",
                "build-2024/out",
            ],
            [".DS_Store", "packages/.DS_Store"],
        )

    def test_default_rules_exclude_at_any_depth(self):
        paths = rel_paths(scan_folders(self.root, DEFAULT_RULES))
        assert paths == ["build-2024", "build-2024/out", "packages", "packages/web", "packages/web/src"]

    def test_excluded_directory_never_visited(self, monkeypatch):
        listed = []
        real_scandir = os.scandir

        def tracking_scandir(path):
            listed.append(Path(path).name)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", tracking_scandir)
        scan_folders(self.root, DEFAULT_RULES)

        assert ".git" not in listed
        assert "objects" not in listed
        assert "node_modules" not in listed

    def test_wildcard_rule(self):
        paths = rel_paths(scan_folders(self.root, DEFAULT_RULES + ["build-*"]))
        assert not any(p.startswith("build-") for p in paths)

    def test_no_rules_lists_everything(self):
        paths = rel_paths(scan_folders(self.root, []))
        assert ".git/objects/ab" in paths
        assert "packages/web/node_modules/react" in paths


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------

class TestFailures:

    def test_missing_root(self, tmp_path):
        with pytest.raises(PathNotFoundError):
            scan_folders(tmp_path / "nope", DEFAULT_RULES)

    def test_root_is_a_file(self, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")
        with pytest.raises(PathNotFoundError):
            scan_folders(file_path, DEFAULT_RULES)

    def test_path_not_found_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            scan_folders(tmp_path / "nope", [])

    def test_unreadable_subtree_is_skipped(self, tmp_path, monkeypatch):
        root = make_tree(tmp_path / "tree", ["a/locked/inner", "a/open/inner", "b"])
        real_scandir = os.scandir

        def failing_scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", failing_scandir)
        result = FolderScanner(ScanOptions(exclude_patterns=[])).scan(root)

        # The locked folder itself is listed, its children are not
        assert rel_paths(result.folders) == ["a", "a/locked", "a/open", "a/open/inner", "b"]
        assert len(result.warnings) == 1
        assert result.warnings[0].path == "a/locked"
        assert "Permission denied" in result.warnings[0].message

    def test_progress_callback(self, tmp_path):
        root = make_tree(tmp_path / "tree", ["a/b", "c"])
        updates = []
        FolderScanner().scan(root, updates.append)

        # One update per listed directory, root included
        assert [u.current_path for u in updates] == ["", "a", "a/b", "c"]
        assert updates[-1].folders_found == 3


# ---------------------------------------------------------------------------
# Symlinked directories
#
# tree/
# ├── app/
# ├── shared/assets/img/
# └── vendor -> shared
# ---------------------------------------------------------------------------

def link_dir(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("cannot create symlinks here")


class TestSymlinks:

    def setup_method(self):
        self.rules: list[str] = []

    def test_linked_directory_is_followed(self, tmp_path):
        root = make_tree(tmp_path / "tree", ["app", "shared/assets/img"])
        link_dir(root / "shared", root / "vendor")

        result = FolderScanner.with_rules(self.rules).scan(root)

        assert rel_paths(result.folders) == [
            "app", "shared", "shared/assets", "shared/assets/img",
            "vendor", "vendor/assets", "vendor/assets/img",
        ]
        assert result.warnings == []

    def test_linked_folders_reported_missing(self, tmp_path):
        source = make_tree(tmp_path / "src", ["app", "shared/assets/img"])
        link_dir(tmp_path / "shared-real", source / "vendor")
        make_tree(tmp_path / "shared-real", ["assets/img"])
        target = make_tree(tmp_path / "tgt", ["app", "shared/assets/img"])

        result = FolderComparer().compare(source, target)

        assert rel_paths(result.missing) == ["vendor", "vendor/assets", "vendor/assets/img"]

    def test_not_followed_when_disabled(self, tmp_path):
        root = make_tree(tmp_path / "tree", ["real/child"])
        link_dir(root / "real", root / "link")

        result = FolderScanner(ScanOptions(follow_symlinks=False)).scan(root)

        assert rel_paths(result.folders) == ["real", "real/child"]

    def test_link_to_ancestor_terminates_with_warning(self, tmp_path):
        root = make_tree(tmp_path / "tree", ["a/b"])
        link_dir(root / "a", root / "a" / "loop")

        result = FolderScanner.with_rules(self.rules).scan(root)

        assert rel_paths(result.folders) == ["a", "a/b", "a/loop"]
        assert [(w.path, w.message) for w in result.warnings] == [
            ("a/loop", "Directory cycle detected"),
        ]

    def test_link_to_root_terminates(self, tmp_path):
        root = make_tree(tmp_path / "tree", ["x"])
        link_dir(root, root / "x" / "up")
        link_dir(root, root / "self")

        result = FolderScanner.with_rules(self.rules).scan(root)

        assert rel_paths(result.folders) == ["self", "x", "x/up"]
        assert sorted(w.path for w in result.warnings) == ["self", "x/up"]
