"""
Tests for the FileManager lookups and creation helpers.
"""

import os
import pytest

import filetree
from filetree.FileManager import (
    FileManager,
    File,
    Folder,
    PathMetadata,
    get_folder,
    get_file,
    path_exists,
    get_stat,
)


class TestLookups:
    """Typed lookups return a handle only for the requested kind."""

    @pytest.mark.asyncio
    async def test_get_folder_existing(self, sample_tree):
        """get_folder should return a Folder for a directory."""
        folder = await FileManager.get_folder(str(sample_tree / "sub"))

        assert isinstance(folder, Folder)
        assert folder.path == str(sample_tree / "sub")

    @pytest.mark.asyncio
    async def test_get_folder_on_file(self, sample_tree):
        """get_folder should return None for a regular file."""
        assert await FileManager.get_folder(str(sample_tree / "readme.txt")) is None

    @pytest.mark.asyncio
    async def test_get_folder_missing(self, temp_dir):
        """get_folder should return None rather than raise."""
        assert await FileManager.get_folder(str(temp_dir / "nope")) is None

    @pytest.mark.asyncio
    async def test_get_file_existing(self, sample_tree):
        """get_file should return a File for a regular file."""
        file = await FileManager.get_file(str(sample_tree / "readme.txt"))

        assert isinstance(file, File)
        assert file.extension == "txt"

    @pytest.mark.asyncio
    async def test_get_file_on_folder(self, sample_tree):
        """get_file should return None for a directory."""
        assert await FileManager.get_file(str(sample_tree / "sub")) is None

    @pytest.mark.asyncio
    async def test_get_file_under_a_file(self, sample_tree):
        """A path through a regular file should read as absent."""
        assert await FileManager.get_file(str(sample_tree / "readme.txt" / "x")) is None

    @pytest.mark.asyncio
    async def test_get_prefers_folder(self, sample_tree):
        """get should resolve to the kind found on disk."""
        assert isinstance(await FileManager.get(str(sample_tree / "sub")), Folder)
        assert isinstance(await FileManager.get(str(sample_tree / "data.json")), File)
        assert await FileManager.get(str(sample_tree / "missing")) is None

    @pytest.mark.asyncio
    async def test_module_level_shortcuts(self, sample_tree):
        """Convenience functions should mirror the class methods."""
        assert await get_folder(str(sample_tree)) == Folder(sample_tree)
        assert await get_file(str(sample_tree / "readme.txt")) == File(sample_tree / "readme.txt")
        assert await path_exists(str(sample_tree / "sub")) is True

    def test_top_level_export(self):
        """The package root should re-export the handle classes."""
        assert filetree.FileManager.FileManager is FileManager
        assert filetree.Folder is Folder
        assert filetree.File is File


class TestExistsAndStat:
    """Tests for path_exists and get_stat."""

    @pytest.mark.asyncio
    async def test_path_exists(self, sample_tree):
        """path_exists should be True for files and folders alike."""
        assert await FileManager.path_exists(str(sample_tree / "readme.txt")) is True
        assert await FileManager.path_exists(str(sample_tree / "sub")) is True
        assert await FileManager.path_exists(str(sample_tree / "missing")) is False

    @pytest.mark.asyncio
    async def test_get_stat_file(self, sample_tree):
        """get_stat should describe a file."""
        meta = await get_stat(str(sample_tree / "readme.txt"))

        assert isinstance(meta, PathMetadata)
        assert meta.is_file is True
        assert meta.is_directory is False
        assert meta.size_bytes == len("Hello World")
        assert meta.name == "readme.txt"
        assert meta.modified_at is not None

    @pytest.mark.asyncio
    async def test_get_stat_directory(self, sample_tree):
        """get_stat should describe a directory."""
        meta = await FileManager.get_stat(str(sample_tree / "sub"))

        assert meta.is_directory is True
        assert meta.size_bytes == 0
        assert meta.to_dict()["path"] == str(sample_tree / "sub")

    @pytest.mark.asyncio
    async def test_get_stat_missing(self, temp_dir):
        """get_stat should return None for a missing path."""
        assert await FileManager.get_stat(str(temp_dir / "missing")) is None

    @pytest.mark.asyncio
    async def test_get_stat_propagates_other_errors(self, temp_dir, monkeypatch):
        """Failures other than non-existence should propagate."""
        def denied(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(os, "stat", denied)

        with pytest.raises(PermissionError):
            await FileManager.get_stat(str(temp_dir))


class TestCreation:
    """Tests for create_folder and create_file."""

    @pytest.mark.asyncio
    async def test_create_folder(self, temp_dir):
        """create_folder should make and return the folder."""
        folder = await FileManager.create_folder(str(temp_dir / "made"))

        assert os.path.isdir(folder.path)

    @pytest.mark.asyncio
    async def test_create_folder_over_file_raises(self, sample_tree):
        """Creating a folder where a file sits should fail."""
        with pytest.raises(FileExistsError):
            await FileManager.create_folder(str(sample_tree / "readme.txt"))

    @pytest.mark.asyncio
    async def test_create_file(self, temp_dir):
        """create_file should make and return the file."""
        file = await FileManager.create_file(str(temp_dir / "made.txt"), "content")

        assert await file.read() == "content"

    @pytest.mark.asyncio
    async def test_list_nested(self, sample_tree):
        """list_nested on the facade should walk the tree."""
        paths = await FileManager.list_nested(str(sample_tree), ".txt")

        assert str(sample_tree / "readme.txt") in paths
        assert str(sample_tree / "sub" / "nested.txt") in paths
        assert str(sample_tree / "data.json") not in paths
