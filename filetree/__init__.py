"""
filetree - object handles over a hierarchical filesystem.

    from filetree.FileManager import FileManager, Folder, File
"""

from filetree import Config
from filetree import FileManager
from filetree.FileManager import (
    Handle,
    File,
    Folder,
    HandleKind,
    HandleInfo,
    PathMetadata,
    FileManagerError,
    NotFoundError,
    InvalidArgumentError,
    ObjectParseError,
    ObjectSerializationError,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FileManager",
    "Handle",
    "File",
    "Folder",
    "HandleKind",
    "HandleInfo",
    "PathMetadata",
    "FileManagerError",
    "NotFoundError",
    "InvalidArgumentError",
    "ObjectParseError",
    "ObjectSerializationError",
]
