"""
FileManager filesystem primitives.

Thin async wrappers around the blocking os/shutil calls. Each primitive runs in
a worker thread and returns when the call completes; errors propagate as the
``OSError`` raised by the underlying call.
"""

import asyncio
import os
import shutil
import stat
from typing import List, Optional

from filetree.shared.gate import GateLogger

_log = GateLogger.get("FileManager")


async def stat_path(path: str) -> Optional[os.stat_result]:
    """
    Stat a path.

    Returns:
        The stat result, or None if nothing exists at the path. Any other
        failure (permission, device) is raised.
    """
    try:
        return await asyncio.to_thread(os.stat, path)
    except (FileNotFoundError, NotADirectoryError):
        return None


async def path_exists(path: str) -> bool:
    """Check whether anything exists at a path."""
    return await stat_path(path) is not None


async def is_directory(path: str) -> bool:
    """Check whether a path is an existing directory."""
    result = await stat_path(path)
    return result is not None and stat.S_ISDIR(result.st_mode)


async def is_file(path: str) -> bool:
    """Check whether a path is an existing regular file."""
    result = await stat_path(path)
    return result is not None and stat.S_ISREG(result.st_mode)


def _read_text(path: str, encoding: str) -> str:
    with open(path, "r", encoding=encoding) as f:
        return f.read()


def _write_text(path: str, content: str, encoding: str) -> None:
    with open(path, "w", encoding=encoding) as f:
        f.write(content)


async def read_text(path: str, encoding: str = "utf-8") -> str:
    """Read a whole file as text."""
    content = await asyncio.to_thread(_read_text, path, encoding)
    _log.debug(f"Read {len(content)} characters from {path}")
    return content


async def write_text(path: str, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file, creating or truncating it."""
    await asyncio.to_thread(_write_text, path, content, encoding)
    _log.debug(f"Wrote {len(content)} characters to {path}")


async def make_directory(path: str) -> None:
    """Create a single directory level. The parent must exist."""
    await asyncio.to_thread(os.mkdir, path)
    _log.debug(f"Created directory {path}")


async def rename_path(source: str, destination: str) -> None:
    """Rename or move an entry."""
    await asyncio.to_thread(os.rename, source, destination)
    _log.debug(f"Renamed {source} -> {destination}")


def _remove(path: str) -> bool:
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return False

    try:
        if stat.S_ISDIR(mode):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        # Removed by someone else in the meantime
        return False
    return True


async def remove_path(path: str) -> None:
    """Remove a file or directory tree. A missing path is not an error."""
    removed = await asyncio.to_thread(_remove, path)
    if removed:
        _log.debug(f"Removed {path}")


async def list_directory(path: str) -> List[str]:
    """List the entry names of one directory level, in the order the OS returns them."""
    return await asyncio.to_thread(os.listdir, path)
