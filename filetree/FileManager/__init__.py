"""
FileManager - Object handles over the local filesystem.

Provides:
- Typed, existence-checked lookups (folder vs. file)
- File and Folder handles that keep their path valid across rename/move
- Collision-aware clone and reparent
- Recursive descendant listing
- Structured read/write (JSON, or TOML for ".toml" files)

Text encoding and JSON indentation come from filetree.Config, which is loaded
on first use. Loading it reads a .env file and ./filetree.json from the
current working directory unless FILETREE_CONFIG_FILE points elsewhere.

Usage:
    from filetree.FileManager import FileManager, Folder

    root = await Folder.create("/tmp/work")
    notes = await FileManager.create_file("/tmp/work/notes.json")
    await notes.write_object({"done": False})

    backup = await root.clone()             # /tmp/work copy1
    await notes.set_parent(backup)          # notes.json -> "notes copy.json"
"""

from typing import List, Optional

from filetree.shared.gate import PathUtils

from .errors import (
    FileManagerError,
    NotFoundError,
    InvalidArgumentError,
    ObjectCodecError,
    ObjectParseError,
    ObjectSerializationError,
)
from .models import HandleKind, HandleInfo, PathMetadata
from .operations import (
    path_exists as op_path_exists,
    stat_path as op_stat_path,
)
from .handles import (
    COPY_SUFFIX,
    Handle,
    File,
    Folder,
    lookup as op_lookup,
    lookup_file as op_lookup_file,
    lookup_folder as op_lookup_folder,
)
from .traversal import list_nested as op_list_nested


class FileManager:
    """
    Entry point for obtaining handles.

    All methods are class methods for easy access throughout the application.
    Lookups never raise for a missing path; they return None.
    """

    Folder = Folder
    File = File

    # ==================== Lookups ====================

    @classmethod
    async def get_folder(cls, path: str) -> Optional[Folder]:
        """
        Get a folder handle.

        Args:
            path: Path to look up

        Returns:
            Folder if a directory exists at path, else None
        """
        return await op_lookup_folder(path)

    @classmethod
    async def get_file(cls, path: str) -> Optional[File]:
        """
        Get a file handle.

        Args:
            path: Path to look up

        Returns:
            File if a regular file exists at path, else None
        """
        return await op_lookup_file(path)

    @classmethod
    async def get(cls, path: str) -> Optional[Handle]:
        """Get a folder handle, else a file handle, else None."""
        return await op_lookup(path)

    @classmethod
    async def path_exists(cls, path: str) -> bool:
        """Check whether anything exists at path."""
        return await op_path_exists(PathUtils.normalize(path))

    @classmethod
    async def get_stat(cls, path: str) -> Optional[PathMetadata]:
        """
        Get metadata for a path.

        Returns:
            PathMetadata, or None if nothing exists at path

        Raises:
            OSError: For failures other than non-existence
        """
        resolved = PathUtils.normalize(path)
        result = await op_stat_path(resolved)
        if result is None:
            return None
        return PathMetadata.from_stat(resolved, result)

    # ==================== Creation ====================

    @classmethod
    async def create_folder(cls, path: str) -> Folder:
        """Get the folder at path, creating it (one level) if absent."""
        return await Folder.create(path)

    @classmethod
    async def create_file(cls, path: str, content: str = "") -> File:
        """Get the file at path, creating it with content if absent."""
        return await File.create(path, content)

    # ==================== Traversal ====================

    @classmethod
    async def list_nested(cls, directory: str, extension: Optional[str] = None) -> List[str]:
        """List every path under directory (folders included, files filtered by suffix)."""
        return await op_list_nested(PathUtils.normalize(directory), extension)


# ==================== Convenience Functions ====================

async def get_folder(path: str) -> Optional[Folder]:
    """Get a folder handle."""
    return await FileManager.get_folder(path)


async def get_file(path: str) -> Optional[File]:
    """Get a file handle."""
    return await FileManager.get_file(path)


async def path_exists(path: str) -> bool:
    """Check whether a path exists."""
    return await FileManager.path_exists(path)


async def get_stat(path: str) -> Optional[PathMetadata]:
    """Get path metadata."""
    return await FileManager.get_stat(path)


__all__ = [
    # Class
    "FileManager",
    # Handles
    "Handle",
    "File",
    "Folder",
    "COPY_SUFFIX",
    # Lookups
    "get_folder",
    "get_file",
    "path_exists",
    "get_stat",
    # Models
    "HandleKind",
    "HandleInfo",
    "PathMetadata",
    # Errors
    "FileManagerError",
    "NotFoundError",
    "InvalidArgumentError",
    "ObjectCodecError",
    "ObjectParseError",
    "ObjectSerializationError",
]
