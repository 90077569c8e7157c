"""Unit tests for the TreeWalker class and the walk() function."""

import errno
import os
from contextlib import nullcontext
from unittest.mock import patch

import pytest

from dirtree.config import TreeConfig
from dirtree.exceptions import (
    EntryUnreadableError,
    PatternSyntaxError,
    RootNotFoundError,
    RootNotReadableError,
    TraversalError,
)
from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.permission_action import PermissionAction
from dirtree.file_system_tree.walker import ERROR_OPENING_DIR, TreeStats, TreeWalker, sort_entries, walk
from dirtree.filter_rules import HiddenFilterRules
from dirtree.types import EntryKind, SortKey

_real_scandir = os.scandir


def names(entry):
    return [child.name for child in entry.children]


def count_tree(entry):
    """Count directories and files below entry the way the summary does."""
    directories = files = 0
    for child in entry.children or []:
        if child.is_dir:
            directories += 1
            sub_dirs, sub_files = count_tree(child)
            directories += sub_dirs
            files += sub_files
        else:
            files += 1
    return directories, files


def unreadable(*suffixes):
    """Return a scandir replacement that refuses to list paths ending in any suffix."""

    def fake_scandir(path):
        if str(path).endswith(suffixes):
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return _real_scandir(path)

    return fake_scandir


class FakeDirEntry:
    """A directory entry whose stat always fails."""

    def __init__(self, directory, name):
        self.name = name
        self.path = os.path.join(directory, name)

    def stat(self, follow_symlinks=True):
        raise PermissionError(errno.EACCES, "Permission denied", self.path)


class FailingListing:
    """A directory listing that breaks off with an error after the given entries."""

    def __init__(self, entries, error):
        self._entries = iter(entries)
        self._error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._entries)
        except StopIteration:
            raise self._error from None


class TestWalk:
    """Basic traversal behavior."""

    def test_project_example(self, project_dir):
        """Test the tree and totals for the documented example."""
        root, stats = walk(project_dir)

        assert root.name == "project"
        assert root.kind is EntryKind.DIRECTORY
        assert names(root) == ["Cargo.toml", "src"]
        assert names(root.children[1]) == ["lib.rs", "main.rs"]
        assert (stats.directories, stats.files, stats.errors) == (1, 3, 0)

    def test_counts_match_tree(self, mixed_dir):
        """Test that the totals equal the entries actually present in the tree."""
        for config in (TreeConfig(), TreeConfig(all=True), TreeConfig(max_depth=1), TreeConfig(dirs_only=True)):
            root, stats = walk(mixed_dir, config)
            assert (stats.directories, stats.files) == count_tree(root)

    def test_explicit_filter_rules(self, mixed_dir):
        """Test that filter rules passed to walk() replace the ones built from the config."""
        root, _ = walk(mixed_dir, TreeConfig(), HiddenFilterRules(show_hidden=True))
        assert ".git" in names(root)
        assert ".env" in names(root)

    def test_root_is_not_counted(self, tmp_path):
        """Test that an empty root directory reports zero directories."""
        root, stats = walk(tmp_path)
        assert root.children == []
        assert (stats.directories, stats.files) == (0, 0)

    def test_full_paths(self, project_dir):
        """Test that full paths are the root argument joined with the names below it."""
        root, _ = walk(project_dir)
        src = root.children[1]

        assert root.full_path == str(project_dir)
        assert src.full_path == os.path.join(str(project_dir), "src")
        assert src.children[0].full_path == os.path.join(str(project_dir), "src", "lib.rs")

    def test_dot_root_uses_directory_name(self, project_dir, monkeypatch):
        """Test that '.' is displayed as the name of the current directory."""
        monkeypatch.chdir(project_dir)
        root, _ = walk(".")

        assert root.name == "project"
        assert root.full_path == "."
        assert root.children[1].full_path == os.path.join(".", "src")

    def test_symlinked_root_keeps_its_own_name(self, project_dir, tmp_path):
        """Test that a linked root is shown under the link name, not the target's."""
        link = tmp_path / "alias"
        os.symlink(project_dir, link)

        root, _ = walk(link)

        assert root.name == "alias"
        assert root.full_path == str(link)
        assert names(root) == ["Cargo.toml", "src"]

    def test_entry_metadata(self, project_dir):
        """Test that sizes, modes and times come from lstat."""
        root, _ = walk(project_dir)
        cargo = root.children[0]
        src = root.children[1]

        assert cargo.size == (project_dir / "Cargo.toml").stat().st_size
        assert cargo.mtime == pytest.approx((project_dir / "Cargo.toml").stat().st_mtime)
        assert cargo.permissions.startswith("-")
        assert src.size == 0
        assert src.permissions.startswith("d")

    def test_file_root(self, tmp_path):
        """Test that a regular file root yields a single-entry tree."""
        target = tmp_path / "notes.txt"
        target.write_text("hello")

        root, stats = walk(target)

        assert root.kind is EntryKind.FILE
        assert root.name == "notes.txt"
        assert root.children is None
        assert (stats.directories, stats.files) == (0, 1)

    def test_missing_root(self, tmp_path):
        """Test that a missing root raises RootNotFoundError."""
        with pytest.raises(RootNotFoundError) as exc_info:
            walk(tmp_path / "missing")
        assert isinstance(exc_info.value, TraversalError)
        assert exc_info.value.path == str(tmp_path / "missing")

    def test_unreadable_root(self, project_dir):
        """Test that a root that cannot be listed is fatal."""
        with patch("os.scandir", side_effect=unreadable("project")):
            with pytest.raises(RootNotReadableError, match="Permission denied"):
                walk(project_dir)

    def test_invalid_pattern_fails_before_traversal(self, project_dir):
        """Test that patterns are compiled before the filesystem is touched."""
        with patch("os.scandir") as mock_scandir, patch("os.stat") as mock_stat:
            with pytest.raises(PatternSyntaxError):
                walk(project_dir, TreeConfig(exclude_patterns=["bad\\"]))
        mock_scandir.assert_not_called()
        mock_stat.assert_not_called()


class TestFiltering:
    """Filtering during traversal."""

    def test_hidden_entries(self, mixed_dir):
        root, _ = walk(mixed_dir)
        assert ".git" not in names(root)
        assert ".env" not in names(root)

        root, stats = walk(mixed_dir, TreeConfig(all=True))
        assert {".git", ".env"} <= set(names(root))
        assert stats.directories == 5

    def test_include_patterns_apply_to_files_only(self, project_dir):
        root, stats = walk(project_dir, TreeConfig(include_patterns=["*.rs"]))
        assert names(root) == ["src"]
        assert names(root.children[0]) == ["lib.rs", "main.rs"]
        assert (stats.directories, stats.files) == (1, 2)

    def test_include_keeps_empty_directories(self, mixed_dir):
        """Test that directories without matching files are still listed outside directories-only mode."""
        root, _ = walk(mixed_dir, TreeConfig(include_patterns=["*.md"]))
        assert names(root) == ["README.md", "docs", "src", "tests"]
        assert names(root.children[3]) == []

    def test_excluded_directory_is_not_entered(self, mixed_dir):
        with patch("os.scandir", side_effect=_real_scandir) as mock_scandir:
            root, stats = walk(mixed_dir, TreeConfig(exclude_patterns=["src"]))

        assert "src" not in names(root)
        assert (stats.directories, stats.files) == (2, 5)
        scanned = [str(call.args[0]) for call in mock_scandir.call_args_list]
        assert not any(path.endswith("src") for path in scanned)

    def test_ignore_case(self, make_tree):
        root_path = make_tree({"README.MD": "", "notes.md": "", "main.c": ""})
        root, _ = walk(root_path, TreeConfig(include_patterns=["*.md"], ignore_case=True))
        assert names(root) == ["README.MD", "notes.md"]

    def test_dirs_only_lists_every_directory(self, mixed_dir):
        root, stats = walk(mixed_dir, TreeConfig(dirs_only=True))
        assert names(root) == ["docs", "src", "tests"]
        assert names(root.children[1]) == ["cache"]
        assert (stats.directories, stats.files) == (4, 0)

    def test_dirs_only_drops_directories_emptied_by_hidden_rule(self, make_tree):
        """Test that a directory holding only hidden entries vanishes in directories-only mode."""
        root_path = make_tree({"a": {".hidden": {}}, "b": {"real": {}}})
        root, stats = walk(root_path, TreeConfig(dirs_only=True))

        assert names(root) == ["b"]
        assert names(root.children[0]) == ["real"]
        assert (stats.directories, stats.files) == (2, 0)

    def test_dirs_only_drops_directories_emptied_by_exclude(self, make_tree):
        root_path = make_tree({"a": {"build": {}}, "b": {"real": {}}})
        root, _ = walk(root_path, TreeConfig(dirs_only=True, exclude_patterns=["build"]))
        assert names(root) == ["b"]

    def test_dirs_only_keeps_directories_holding_matching_files(self, make_tree):
        """Test that include patterns are matched against the files below each directory."""
        root_path = make_tree({"src": {"app.py": ""}, "docs": {"a.md": ""}})
        root, stats = walk(root_path, TreeConfig(dirs_only=True, include_patterns=["*.py"]))

        assert names(root) == ["src"]
        assert root.children[0].children == []
        assert (stats.directories, stats.files) == (1, 0)

    def test_dirs_only_prunes_bottom_up(self, make_tree):
        """Test that only directories leading to a matching file survive."""
        root_path = make_tree(
            {
                "a": {"b": {"c": {"test_x.py": ""}, "other": {"x.txt": ""}}},
                "d": {"e": {}},
                "tests": {},
                "test.py": "",
            }
        )
        root, stats = walk(root_path, TreeConfig(dirs_only=True, include_patterns=["test*"]))

        assert names(root) == ["a"]
        assert names(root.children[0]) == ["b"]
        assert names(root.children[0].children[0]) == ["c"]
        assert (stats.directories, stats.files) == (3, 0)

    def test_dirs_only_keeps_empty_directories_without_include(self, make_tree):
        root_path = make_tree({"empty": {}, "full": {"x.txt": ""}})
        root, _ = walk(root_path, TreeConfig(dirs_only=True))
        assert names(root) == ["empty", "full"]

    def test_dirs_only_keeps_unread_directories(self, make_tree):
        """Test that directories at the depth limit are kept since their contents are unknown."""
        root_path = make_tree({"src": {"tests": {}}, "docs": {"a.md": ""}, "README": ""})
        root, stats = walk(root_path, TreeConfig(dirs_only=True, include_patterns=["*.py"], max_depth=1))

        assert names(root) == ["docs", "src"]
        assert all(child.children == [] for child in root.children)
        assert stats.directories == 2

    def test_include_without_dirs_only_keeps_directories(self, make_tree):
        root_path = make_tree({"src": {"app.py": ""}, "docs": {"a.md": ""}})
        root, _ = walk(root_path, TreeConfig(include_patterns=["*.py"]))
        assert names(root) == ["docs", "src"]
        assert names(root.children[0]) == []


class TestDepthLimit:
    """Depth limiting."""

    def test_max_depth_one(self, project_dir):
        """Test that depth-1 directories are listed and counted but not expanded."""
        root, stats = walk(project_dir, TreeConfig(max_depth=1))

        assert names(root) == ["Cargo.toml", "src"]
        assert root.children[1].children == []
        assert root.children[1].error is None
        assert (stats.directories, stats.files) == (1, 1)

    def test_max_depth_two(self, make_tree):
        root_path = make_tree({"a": {"b": {"c": {"deep.txt": ""}}, "a.txt": ""}})
        root, stats = walk(root_path, TreeConfig(max_depth=2))

        a = root.children[0]
        assert names(a) == ["a.txt", "b"]
        assert a.children[1].children == []
        assert (stats.directories, stats.files) == (2, 1)

    def test_depth_limited_directory_is_not_read(self, make_tree):
        root_path = make_tree({"a": {"b": {}}})
        with patch("os.scandir", side_effect=_real_scandir) as mock_scandir:
            walk(root_path, TreeConfig(max_depth=1))
        assert mock_scandir.call_count == 1


class TestSorting:
    """Ordering of siblings."""

    def test_name_sort_is_case_sensitive(self, make_tree):
        root_path = make_tree({"beta": "", "Alpha": "", "alpha": "", "Beta": ""})
        root, _ = walk(root_path)
        assert names(root) == ["Alpha", "Beta", "alpha", "beta"]

    def test_reverse(self, make_tree):
        root_path = make_tree({"a": "", "b": "", "c": ""})
        root, _ = walk(root_path, TreeConfig(reverse=True))
        assert names(root) == ["c", "b", "a"]

    def test_dirs_first_with_reverse(self, make_tree):
        """Test that directories stay first when the base order is reversed."""
        root_path = make_tree({"b_dir": {}, "a.txt": "", "c.txt": "", "d_dir": {}})
        root, _ = walk(root_path, TreeConfig(dirs_first=True, reverse=True))
        assert names(root) == ["d_dir", "b_dir", "c.txt", "a.txt"]

    def test_dirs_first_applies_at_every_level(self, make_tree):
        root_path = make_tree({"z": {"a.txt": "", "b": {}}, "a.txt": ""})
        root, _ = walk(root_path, TreeConfig(dirs_first=True))
        assert names(root) == ["z", "a.txt"]
        assert names(root.children[0]) == ["b", "a.txt"]

    def test_sort_by_time(self, make_tree, set_mtime):
        root_path = make_tree({"old": "", "new": "", "mid": ""})
        set_mtime(root_path / "old", 1_000_000)
        set_mtime(root_path / "mid", 2_000_000)
        set_mtime(root_path / "new", 3_000_000)

        root, _ = walk(root_path, TreeConfig(sort_by_time=True))
        assert names(root) == ["old", "mid", "new"]

        root, _ = walk(root_path, TreeConfig(sort_by_time=True, reverse=True))
        assert names(root) == ["new", "mid", "old"]

    def test_sort_by_size(self, make_tree):
        root_path = make_tree({"big": "x" * 300, "small": "x", "medium": "x" * 20})
        root, _ = walk(root_path, TreeConfig(sort_key=SortKey.SIZE))
        assert names(root) == ["small", "medium", "big"]

    def test_unsorted_keeps_listing_order(self, make_tree):
        root_path = make_tree({"c": "", "a": "", "b": ""})
        listing_order = [entry.name for entry in _real_scandir(root_path)]
        root, _ = walk(root_path, TreeConfig(sort_key=SortKey.NONE, reverse=True))
        assert names(root) == listing_order


class TestSortEntries:
    """The sort_entries helper on its own."""

    def test_ties_broken_by_name(self):
        entries = [
            Entry("b", "b", EntryKind.FILE, size=1),
            Entry("a", "a", EntryKind.FILE, size=1),
            Entry("c", "c", EntryKind.FILE, size=0),
        ]
        assert [e.name for e in sort_entries(entries, SortKey.SIZE)] == ["c", "a", "b"]

    def test_returns_new_list(self):
        entries = [Entry("b", "b", EntryKind.FILE), Entry("a", "a", EntryKind.FILE)]
        result = sort_entries(entries)
        assert [e.name for e in entries] == ["b", "a"]
        assert [e.name for e in result] == ["a", "b"]


class TestSymlinks:
    """Symbolic links are reported, never followed."""

    def test_symlink_to_directory(self, project_dir):
        os.symlink("src", project_dir / "link")
        root, stats = walk(project_dir)

        link = root.children[1]
        assert link.name == "link"
        assert link.kind is EntryKind.SYMLINK
        assert link.symlink_target == "src"
        assert link.children is None
        assert (stats.directories, stats.files) == (1, 4)

    def test_broken_symlink(self, tmp_path):
        os.symlink("nowhere", tmp_path / "dangling")
        root, stats = walk(tmp_path)

        assert root.children[0].symlink_target == "nowhere"
        assert stats.files == 1
        assert stats.errors == 0

    def test_dirs_only_excludes_links(self, project_dir):
        os.symlink("src", project_dir / "link")
        root, _ = walk(project_dir, TreeConfig(dirs_only=True))
        assert names(root) == ["src"]


class TestUnreadableEntries:
    """Partial failure below the root."""

    def test_unreadable_directory_is_kept_and_counted(self, mixed_dir):
        with patch("os.scandir", side_effect=unreadable("docs")):
            root, stats = walk(mixed_dir)

        docs = root.children[1]
        assert docs.name == "docs"
        assert docs.children == []
        assert docs.error == ERROR_OPENING_DIR
        assert stats.errors == 1
        assert stats.error_messages == [f"Cannot read {docs.full_path}: Permission denied"]
        # Siblings are still walked
        assert names(root.children[3]) == ["app.py", "cache", "util.py"]
        assert (stats.directories, stats.files) == count_tree(root)

    def test_unreadable_directory_raises_with_raise_action(self, mixed_dir):
        config = TreeConfig(permission_action=PermissionAction.RAISE)
        with patch("os.scandir", side_effect=unreadable("docs")):
            with pytest.raises(EntryUnreadableError) as exc_info:
                walk(mixed_dir, config)
        assert exc_info.value.path.endswith("docs")

    def test_listing_failure_keeps_entries_already_read(self, mixed_dir):
        """Test that a directory whose listing breaks off keeps the entries read before the failure."""

        def scandir_failing_in_src(path):
            entries = list(_real_scandir(path))
            if str(path).endswith("src"):
                return FailingListing(entries[:1], OSError(errno.EIO, "Input/output error"))
            return nullcontext(entries)

        with patch("os.scandir", side_effect=scandir_failing_in_src):
            root, stats = walk(mixed_dir)

        src = root.children[3]
        assert src.name == "src"
        assert len(src.children) == 1
        assert src.error is None
        assert stats.error_messages == [f"Cannot read {src.full_path}: Input/output error"]
        assert names(root.children[1]) == ["api.md", "guide.md"]
        assert (stats.directories, stats.files) == count_tree(root)

    def test_listing_failure_raises_with_raise_action(self, mixed_dir):
        def scandir_failing_in_src(path):
            entries = list(_real_scandir(path))
            if str(path).endswith("src"):
                return FailingListing(entries[:1], OSError(errno.EIO, "Input/output error"))
            return nullcontext(entries)

        config = TreeConfig(permission_action=PermissionAction.RAISE)
        with patch("os.scandir", side_effect=scandir_failing_in_src):
            with pytest.raises(EntryUnreadableError) as exc_info:
                walk(mixed_dir, config)
        assert exc_info.value.path.endswith("src")

    def test_entry_stat_failure_is_skipped(self, project_dir):
        def scandir_with_bad_entry(path):
            entries = list(_real_scandir(path))
            if str(path) == str(project_dir):
                entries.append(FakeDirEntry(str(path), "ghost"))
            return nullcontext(entries)

        with patch("os.scandir", side_effect=scandir_with_bad_entry):
            root, stats = walk(project_dir)

        assert "ghost" not in names(root)
        assert stats.errors == 1
        assert stats.error_messages[0].endswith("ghost: Permission denied")
        assert (stats.directories, stats.files) == (1, 3)

    def test_entry_stat_failure_raises_with_raise_action(self, project_dir):
        def scandir_with_bad_entry(path):
            return nullcontext(list(_real_scandir(path)) + [FakeDirEntry(str(path), "ghost")])

        config = TreeConfig(permission_action="raise")
        with patch("os.scandir", side_effect=scandir_with_bad_entry):
            with pytest.raises(EntryUnreadableError, match="ghost"):
                walk(project_dir, config)


class TestTreeWalker:
    """TreeWalker construction."""

    def test_default_config(self):
        walker = TreeWalker()
        assert walker.config == TreeConfig()
        assert not walker.display_rules.has_rules()

    def test_rules_built_from_config(self):
        walker = TreeWalker(TreeConfig(dirs_only=True, include_patterns=["*.py"]))
        assert walker.display_rules.has_rules()
        assert walker.filter_rules.has_rules()

    def test_walk_can_be_repeated(self, project_dir):
        walker = TreeWalker()
        first_root, first_stats = walker.walk(project_dir)
        second_root, second_stats = walker.walk(project_dir)
        assert first_root == second_root
        assert first_stats == second_stats
        assert first_root is not second_root


def test_tree_stats():
    stats = TreeStats()
    stats.count(Entry("d", "d", EntryKind.DIRECTORY))
    stats.count(Entry("f", "f", EntryKind.FILE))
    stats.count(Entry("l", "l", EntryKind.SYMLINK))
    stats.record_error("Cannot read x: nope")
    assert (stats.directories, stats.files, stats.errors) == (1, 2, 1)
    assert stats.error_messages == ["Cannot read x: nope"]
