"""
Tests for the recursive directory walker.
"""

import logging
import os
import pytest

from filetree.FileManager import traversal
from filetree.FileManager.traversal import list_nested


class TestListNested:
    """Tests for list_nested."""

    @pytest.mark.asyncio
    async def test_lists_everything_without_filter(self, sample_tree):
        """Without a filter every folder and file should appear."""
        paths = await list_nested(str(sample_tree))

        assert sorted(os.path.relpath(p, sample_tree) for p in paths) == sorted([
            ".gitignore",
            "data.json",
            "readme.txt",
            "settings.toml",
            "sub",
            os.path.join("sub", "nested.txt"),
            os.path.join("sub", "deeper"),
            os.path.join("sub", "deeper", "leaf.json"),
        ])

    @pytest.mark.asyncio
    async def test_filter_applies_to_files_only(self, sample_tree):
        """Folders stay in the result even when they do not match."""
        paths = await list_nested(str(sample_tree), ".txt")

        assert sorted(os.path.relpath(p, sample_tree) for p in paths) == sorted([
            "readme.txt",
            "sub",
            os.path.join("sub", "nested.txt"),
            os.path.join("sub", "deeper"),
        ])

    @pytest.mark.asyncio
    async def test_filter_is_a_path_suffix(self, sample_tree):
        """The filter should match the end of the path, not just the extension."""
        paths = await list_nested(str(sample_tree), "nested.txt")

        assert str(sample_tree / "sub" / "nested.txt") in paths
        assert str(sample_tree / "readme.txt") not in paths

    @pytest.mark.asyncio
    async def test_pre_order(self, sample_tree):
        """A folder's own path should come right before its contents."""
        paths = await list_nested(str(sample_tree / "sub"))

        deeper = str(sample_tree / "sub" / "deeper")
        leaf = str(sample_tree / "sub" / "deeper" / "leaf.json")
        assert paths.index(leaf) == paths.index(deeper) + 1

    @pytest.mark.asyncio
    async def test_empty_directory(self, temp_dir):
        """An empty directory yields nothing."""
        (temp_dir / "blank").mkdir()

        assert await list_nested(str(temp_dir / "blank")) == []

    @pytest.mark.asyncio
    async def test_missing_directory_logged_not_raised(self, temp_dir, caplog):
        """A directory that cannot be listed should be logged and skipped."""
        with caplog.at_level(logging.WARNING, logger="filetree.Traversal"):
            paths = await list_nested(str(temp_dir / "missing"))

        assert paths == []
        assert "Could not walk" in caplog.text

    @pytest.mark.asyncio
    async def test_unlistable_branch_keeps_siblings(self, sample_tree, monkeypatch):
        """One failing subdirectory should not abort the rest of the walk."""
        real_list_directory = traversal.list_directory
        blocked = str(sample_tree / "sub")

        async def flaky_list_directory(path):
            if path == blocked:
                raise PermissionError(13, "Permission denied", path)
            return await real_list_directory(path)

        monkeypatch.setattr(traversal, "list_directory", flaky_list_directory)

        paths = await list_nested(str(sample_tree))

        assert blocked in paths
        assert str(sample_tree / "readme.txt") in paths
        assert str(sample_tree / "sub" / "nested.txt") not in paths
