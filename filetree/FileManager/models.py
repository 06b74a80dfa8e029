"""
FileManager Pydantic models.

Defines handle kinds, stat metadata and handle snapshots.
"""

import os
import stat
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class HandleKind(str, Enum):
    """The two concrete kinds of handle."""
    FILE = "file"
    FOLDER = "folder"


class PathMetadata(BaseModel):
    """Stat information about a file or directory."""
    path: str = Field(description="Absolute filesystem path")
    name: str
    is_directory: bool
    is_file: bool
    size_bytes: int = 0
    mode: int = 0
    modified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")

    @classmethod
    def from_stat(cls, path: str, result: os.stat_result) -> "PathMetadata":
        """Build metadata from an ``os.stat`` result."""
        is_dir = stat.S_ISDIR(result.st_mode)
        return cls(
            path=path,
            name=os.path.basename(path),
            is_directory=is_dir,
            is_file=stat.S_ISREG(result.st_mode),
            size_bytes=0 if is_dir else result.st_size,
            mode=result.st_mode,
            modified_at=datetime.fromtimestamp(result.st_mtime),
            created_at=datetime.fromtimestamp(result.st_ctime),
        )


class HandleInfo(BaseModel):
    """Snapshot of a handle's identity."""
    kind: HandleKind
    name: str
    path: str
    parent_path: str
    extension: Optional[str] = Field(default=None, description="Files only")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")
