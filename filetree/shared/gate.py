"""
Shared Gate utilities for filetree.

Provides the patterns every filetree module leans on:
- GateLogger: Unified logging with Python's logging module
- ConfigLoader: Unified JSON config loading/saving
- PathUtils: Common path operations
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import (
    Any,
    Dict,
    Optional,
    Type,
    TypeVar,
    Union,
)


# =============================================================================
# GateLogger - Unified logging for all modules
# =============================================================================


class GateLogger:
    """
    Unified logging for filetree.

    Each component gets its own logger namespaced under "filetree".
    """

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def _ensure_configured(cls):
        """Ensure basic logging is configured."""
        if cls._configured:
            return

        # Configure root filetree logger if not already configured
        root_logger = logging.getLogger("filetree")
        if not root_logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "[%(name)s] %(levelname)s: %(message)s"
            )
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.INFO)

        cls._configured = True

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            gate_name: Name of the component (e.g., "FileManager", "Traversal")

        Returns:
            Logger instance for the component
        """
        cls._ensure_configured()

        logger_name = f"filetree.{gate_name}"
        if logger_name not in cls._loggers:
            cls._loggers[logger_name] = logging.getLogger(logger_name)

        return cls._loggers[logger_name]

    @classmethod
    def set_level(cls, level: Union[int, str], gate_name: Optional[str] = None):
        """
        Set logging level.

        Args:
            level: Logging level (e.g., logging.DEBUG or "DEBUG")
            gate_name: Specific component to set level for, or None for all
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO

        if gate_name:
            cls.get(gate_name).setLevel(level)
        else:
            cls._ensure_configured()
            logging.getLogger("filetree").setLevel(level)


# =============================================================================
# ConfigLoader - Unified JSON config loading
# =============================================================================


ConfigT = TypeVar("ConfigT")


class ConfigLoader:
    """
    Unified configuration loading and saving.

    Provides consistent config file handling across filetree.
    """

    @staticmethod
    def load(
        path: Union[str, Path],
        model_class: Type[ConfigT] = dict,
        create_default: bool = True,
    ) -> Optional[ConfigT]:
        """
        Load a JSON config file into a model class.

        Args:
            path: Path to the config file
            model_class: Class with model_validate() or a plain mapping type
            create_default: If True and file doesn't exist, return model_class()

        Returns:
            Instance of model_class or None if file doesn't exist or is unreadable
        """
        path = Path(path)

        if not path.exists():
            if create_default:
                return model_class()
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if hasattr(model_class, "model_validate"):
                return model_class.model_validate(data)
            return model_class(data)

        except (json.JSONDecodeError, OSError, ValueError, TypeError) as e:
            logger = GateLogger.get("ConfigLoader")
            logger.error(f"Failed to load config from {path}: {e}")
            return None

    @staticmethod
    def save(
        path: Union[str, Path],
        config: Any,
        create_dirs: bool = True,
    ) -> bool:
        """
        Save a config object to a JSON file.

        Args:
            path: Path to save the config
            config: Mapping or object with model_dump() method
            create_dirs: Create parent directories if needed

        Returns:
            True if successful
        """
        path = Path(path)

        try:
            if create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)

            if hasattr(config, "model_dump"):
                data = config.model_dump(mode="json")
            else:
                data = dict(config)

            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)

            return True

        except (OSError, TypeError, ValueError) as e:
            logger = GateLogger.get("ConfigLoader")
            logger.error(f"Failed to save config to {path}: {e}")
            return False


# =============================================================================
# PathUtils - Common path operations
# =============================================================================


class PathUtils:
    """Common path utilities."""

    @staticmethod
    def normalize(path: Union[str, "os.PathLike[str]"]) -> str:
        """
        Normalize a path to an absolute, canonical string.

        Expands ``~``, collapses ``.`` and ``..`` segments and anchors
        relative paths at the current working directory. Symlinks are
        left alone.
        """
        path = os.path.expanduser(os.fspath(path))
        path = os.path.normpath(path)
        return os.path.abspath(path)

    @staticmethod
    def is_within(path: str, root: str) -> bool:
        """Check whether ``path`` is ``root`` or lies somewhere beneath it."""
        try:
            return os.path.commonpath([root, path]) == root
        except ValueError:
            # Different drives on Windows
            return False


# =============================================================================
# Convenience exports
# =============================================================================


def get_logger(gate_name: str) -> logging.Logger:
    """Shortcut for GateLogger.get()."""
    return GateLogger.get(gate_name)
