"""
FileManager handles.

A handle is a lightweight, path-keyed reference to a filesystem entry. It holds
no open resource and caches only its own path and the path of its parent; all
structural questions are answered by asking the filesystem again.

Two concrete kinds exist, File and Folder. Behaviour that differs between them
(how a colliding name is split, how a clone is materialized) is dispatched
through methods each kind overrides.
"""

import os
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Type, Union

from pydantic import BaseModel

from filetree import Config
from filetree.shared.gate import GateLogger, PathUtils

from .codecs import codec_for, decode, encode
from .errors import InvalidArgumentError, NotFoundError
from .models import HandleInfo, HandleKind
from .operations import (
    is_directory,
    is_file,
    list_directory,
    make_directory,
    path_exists,
    read_text,
    remove_path,
    rename_path,
    write_text,
)
from .traversal import list_nested

_log = GateLogger.get("FileManager")

# Appended on name collisions. Reparent stacks it ("x copy copy"),
# clone numbers it ("x copy1", "x copy2").
COPY_SUFFIX = " copy"

PathArg = Union[str, "os.PathLike[str]"]


def _encoding() -> str:
    return Config.get("FILETREE_ENCODING", "utf-8")


class Handle(ABC):
    """Base class for File and Folder handles."""

    kind: HandleKind

    def __init__(self, path: PathArg):
        self._path = PathUtils.normalize(path)
        self._parent_path = os.path.dirname(self._path)

    # ==================== Identity ====================

    @property
    def path(self) -> str:
        """Absolute path of the entry."""
        return self._path

    @property
    def parent_path(self) -> str:
        """Absolute path of the containing directory."""
        return self._parent_path

    @property
    def name(self) -> str:
        """Last path segment."""
        return os.path.basename(self._path)

    @property
    def parent(self) -> "Folder":
        """Handle for the containing directory (not existence-checked)."""
        return Folder(self._parent_path)

    def info(self) -> HandleInfo:
        """Snapshot of this handle's identity."""
        return HandleInfo(
            kind=self.kind,
            name=self.name,
            path=self._path,
            parent_path=self._parent_path,
        )

    async def exists(self) -> bool:
        """Check whether the entry still exists with this handle's kind."""
        if self.kind == HandleKind.FOLDER:
            return await is_directory(self._path)
        return await is_file(self._path)

    def __eq__(self, other):
        if not isinstance(other, Handle):
            return NotImplemented
        return self.kind == other.kind and self._path == other._path

    def __hash__(self):
        # Follows the current path, so re-hash after set_name/set_parent
        return hash((self.kind, self._path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    # ==================== Mutation ====================

    async def set_name(self, name: str) -> None:
        """
        Rename the entry within its current directory.

        No collision check is made; whatever the OS does with an existing
        target (replace it, or raise) is what happens.

        Raises:
            InvalidArgumentError: If name is not a single path component
            OSError: If the underlying rename fails
        """
        separators = [sep for sep in (os.sep, os.altsep) if sep]
        if name in ("", ".", "..") or any(sep in name for sep in separators):
            raise InvalidArgumentError(f"Invalid name: {name!r}")

        target = os.path.join(self._parent_path, name)
        await rename_path(self._path, target)
        _log.info(f"Renamed {self._path} -> {target}")
        self._path = target

    async def set_parent(self, new_parent: Union[PathArg, "Folder"]) -> None:
        """
        Move the entry into another folder, keeping its name if free.

        If the destination already holds an entry with this name, the entry
        is first renamed in place with a " copy" suffix and the move is
        retried, so repeated collisions give "a copy.txt", "a copy copy.txt".

        Args:
            new_parent: Folder handle or path of an existing folder

        Raises:
            NotFoundError: If new_parent is a path with no folder behind it
            InvalidArgumentError: If new_parent is neither a path nor a Folder
            OSError: If the underlying rename fails
        """
        destination = await self._resolve_parent(new_parent)
        target = os.path.join(destination, self.name)

        if target == self._path:
            return

        if await path_exists(target):
            stem, suffix = self._split_name()
            await self.set_name(f"{stem}{COPY_SUFFIX}{suffix}")
            await self.set_parent(new_parent)
            return

        await rename_path(self._path, target)
        _log.info(f"Moved {self._path} -> {target}")
        self._path = target
        self._parent_path = os.path.dirname(target)

    async def clone(
        self,
        target_directory: Optional[Union[PathArg, "Folder"]] = None,
        overwrite: bool = False,
    ) -> "Handle":
        """
        Copy the entry into a directory and return a handle to the copy.

        Args:
            target_directory: Folder handle or path; defaults to the current parent
            overwrite: Replace an existing entry of the same name instead of
                picking a free "name copyN" variant

        Returns:
            Handle of the same kind for the copy
        """
        if target_directory is None:
            directory = self._parent_path
        else:
            directory = _directory_of(target_directory)

        return await self._clone_to(os.path.join(directory, self.name), overwrite)

    async def destroy(self) -> None:
        """Remove the entry (recursively for folders). Missing entries are ignored."""
        await remove_path(self._path)
        _log.info(f"Destroyed {self._path}")

    # ==================== Kind-specific hooks ====================

    def _split_name(self) -> Tuple[str, str]:
        """Split the name into the part a copy suffix follows and the rest."""
        return self.name, ""

    async def _snapshot(self) -> Optional[List[Tuple["Handle", Optional[list]]]]:
        """Current layout below the entry; None for entries without children."""
        return None

    @abstractmethod
    async def _clone_to(
        self, destination: str, overwrite: bool, snapshot: Optional[list] = None
    ) -> "Handle":
        """Materialize a copy at ``destination`` (before collision handling)."""

    async def _free_destination(self, destination: str) -> str:
        """First of destination, "stem copy1ext", "stem copy2ext", ... not in use."""
        directory = os.path.dirname(destination)
        stem, suffix = self._split_name()
        candidate = destination
        counter = 1

        while await path_exists(candidate):
            candidate = os.path.join(directory, f"{stem}{COPY_SUFFIX}{counter}{suffix}")
            counter += 1

        return candidate

    @staticmethod
    async def _resolve_parent(new_parent: Union[PathArg, "Folder"]) -> str:
        if isinstance(new_parent, Folder):
            return new_parent.path

        if isinstance(new_parent, (str, os.PathLike)):
            folder = await lookup_folder(new_parent)
            if folder is None:
                raise NotFoundError(
                    f"There's no directory under {os.fspath(new_parent)}",
                    path=os.fspath(new_parent),
                )
            return folder.path

        raise InvalidArgumentError(
            f"Invalid parent directory type: {type(new_parent).__name__}"
        )


class File(Handle):
    """Handle for a regular file."""

    kind = HandleKind.FILE

    @classmethod
    async def create(cls, path: PathArg, content: str = "") -> "File":
        """
        Get the file at ``path``, creating it with ``content`` if absent.

        An existing file is returned untouched.
        """
        file = await lookup_file(path)

        if file is None:
            file = cls(path)
            await write_text(file.path, content, _encoding())
            _log.info(f"Created file {file.path}")

        return file

    @property
    def extension(self) -> str:
        """
        Text after the last dot of the name, without the dot.

        Empty when there is no dot or the only dot leads the name
        (".gitignore").
        """
        name = self.name
        dot_index = name.rfind(".")

        if dot_index <= 0:
            return ""

        return name[dot_index + 1:]

    def info(self) -> HandleInfo:
        return super().info().model_copy(update={"extension": self.extension})

    async def read(self) -> str:
        """Read the whole file as text."""
        return await read_text(self._path, _encoding())

    async def write(self, content: str) -> None:
        """Replace the whole file with ``content``."""
        await write_text(self._path, content, _encoding())

    async def read_object(self, model: Optional[Type[BaseModel]] = None):
        """
        Read and decode the file (TOML for ".toml", JSON otherwise).

        Args:
            model: Optional pydantic model to validate the decoded data into

        Raises:
            ObjectParseError: If the content does not decode
        """
        return decode(await self.read(), codec_for(self._path), model=model, path=self._path)

    async def write_object(self, value) -> None:
        """
        Encode ``value`` (TOML for ".toml", JSON otherwise) and write it.

        Raises:
            ObjectSerializationError: If the value cannot be encoded
        """
        text = encode(
            value,
            codec_for(self._path),
            indent=Config.get("FILETREE_JSON_INDENT"),
            path=self._path,
        )
        await self.write(text)

    def _split_name(self) -> Tuple[str, str]:
        return os.path.splitext(self.name)

    async def _clone_to(
        self, destination: str, overwrite: bool, snapshot: Optional[list] = None
    ) -> "File":
        if not overwrite:
            destination = await self._free_destination(destination)

        content = await self.read()
        await write_text(destination, content, _encoding())
        _log.info(f"Cloned {self._path} -> {destination}")

        return File(destination)


class Folder(Handle):
    """Handle for a directory. Children are never cached."""

    kind = HandleKind.FOLDER

    @classmethod
    async def create(cls, path: PathArg) -> "Folder":
        """
        Get the folder at ``path``, creating it if absent.

        Only the last level is created; the parent must already exist.
        """
        folder = await lookup_folder(path)

        if folder is None:
            folder = cls(path)
            await make_directory(folder.path)
            _log.info(f"Created folder {folder.path}")

        return folder

    async def get_children(self, extension: Optional[str] = None) -> List[Handle]:
        """
        Handles for the entries directly inside this folder.

        Args:
            extension: Keep only entries whose full path ends with this
                literal suffix (folders included)

        Returns:
            Handles in listing order; entries that are neither a folder nor
            a file by the time they are looked up are skipped
        """
        children: List[Handle] = []

        for entry in await list_directory(self._path):
            entry_path = os.path.join(self._path, entry)
            child = await lookup(entry_path)

            if child is None:
                continue

            if extension is None or entry_path.endswith(extension):
                children.append(child)

        return children

    async def get_descendants(self, extension: Optional[str] = None) -> List[Handle]:
        """
        Handles for every entry nested under this folder, depth-first.

        Folders are always listed; files only when they match ``extension``.
        """
        descendants: List[Handle] = []

        for nested_path in await list_nested(self._path, extension):
            handle = await lookup(nested_path)
            if handle is not None:
                descendants.append(handle)

        return descendants

    async def find_first_folder(self, name: str) -> Optional["Folder"]:
        """Folder named ``name`` directly inside this one, if any."""
        return await lookup_folder(os.path.join(self._path, name))

    async def find_first_file(self, name: str) -> Optional[File]:
        """File named ``name`` directly inside this folder, if any."""
        return await lookup_file(os.path.join(self._path, name))

    async def empty(self) -> None:
        """Destroy every direct child."""
        for child in await self.get_children():
            await child.destroy()

    async def move_children(self, new_parent: Union[PathArg, "Folder"]) -> None:
        """
        Move every direct child into ``new_parent``, one at a time.

        A failure stops the loop; children already moved stay moved.
        """
        for child in await self.get_children():
            await child.set_parent(new_parent)

    async def _snapshot(self) -> List[Tuple[Handle, Optional[list]]]:
        return [(child, await child._snapshot()) for child in await self.get_children()]

    async def _clone_to(
        self, destination: str, overwrite: bool, snapshot: Optional[list] = None
    ) -> "Folder":
        if await path_exists(destination):
            if overwrite:
                if PathUtils.is_within(self._path, destination):
                    raise InvalidArgumentError(
                        f"Cannot overwrite {destination}: it contains {self._path}"
                    )
                await remove_path(destination)
            else:
                destination = await self._free_destination(destination)

        # The whole subtree is listed before the copy exists, so a clone into
        # this folder or any folder below it never picks itself up
        if snapshot is None:
            snapshot = await self._snapshot()
        folder = await Folder.create(destination)

        for child, nested in snapshot:
            await child._clone_to(os.path.join(folder.path, child.name), overwrite, nested)

        _log.info(f"Cloned {self._path} -> {folder.path}")
        return folder


def _directory_of(target: Union[PathArg, Folder]) -> str:
    if isinstance(target, Folder):
        return target.path
    if isinstance(target, (str, os.PathLike)):
        return PathUtils.normalize(target)
    raise InvalidArgumentError(
        f"Invalid target directory type: {type(target).__name__}"
    )


# ==================== Typed lookups ====================


async def lookup_folder(path: PathArg) -> Optional[Folder]:
    """Folder handle for ``path`` if a directory exists there, else None."""
    path = PathUtils.normalize(path)
    if not await is_directory(path):
        return None
    return Folder(path)


async def lookup_file(path: PathArg) -> Optional[File]:
    """File handle for ``path`` if a regular file exists there, else None."""
    path = PathUtils.normalize(path)
    if not await is_file(path):
        return None
    return File(path)


async def lookup(path: PathArg) -> Optional[Handle]:
    """Folder handle, else File handle, else None."""
    return await lookup_folder(path) or await lookup_file(path)
