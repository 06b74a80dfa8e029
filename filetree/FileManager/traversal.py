"""
Recursive directory walking for FileManager.

The walk is best effort: a directory that cannot be listed is logged and
contributes nothing, and the rest of the tree is still returned.
"""

import os
import stat
from typing import List, Optional

from filetree.shared.gate import GateLogger

from .operations import list_directory, stat_path

_log = GateLogger.get("Traversal")


async def list_nested(directory: str, extension: Optional[str] = None) -> List[str]:
    """
    List every path nested under a directory.

    Depth-first, pre-order. Directories are always included and recursed
    into; files are included when ``extension`` is None or the full path ends
    with it.

    Args:
        directory: Directory to walk
        extension: Literal path suffix files must end with

    Returns:
        Flat list of absolute paths, in listing order
    """
    nested: List[str] = []

    try:
        entries = await list_directory(directory)

        for entry in entries:
            entry_path = os.path.join(directory, entry)
            result = await stat_path(entry_path)

            if result is None:
                # Vanished between listing and stat
                continue

            if stat.S_ISDIR(result.st_mode):
                nested.append(entry_path)
                nested.extend(await list_nested(entry_path, extension))
            elif stat.S_ISREG(result.st_mode):
                if extension is None or entry_path.endswith(extension):
                    nested.append(entry_path)

    except OSError as e:
        _log.warning(f"Could not walk {directory}: {e}")

    return nested
