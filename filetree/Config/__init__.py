"""
filetree configuration manager.

Centralized configuration with:
- Schema-driven type conversion
- Environment variable (and .env) fallback
- Persistent JSON overrides

The first lookup loads a .env file found from the working directory (real
environment variables win) and reads FILETREE_CONFIG_FILE, which defaults to
./filetree.json relative to the working directory. Set FILETREE_CONFIG_FILE
to an absolute path to pin it.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from filetree.shared.gate import ConfigLoader, GateLogger

_log = GateLogger.get("Config")

from filetree.Config.schema import (
    CONFIG_SCHEMA,
    ConfigField,
    ConfigType,
    ConfigCategory,
    get_schema_by_key,
    schema_to_dict,
)


class ConfigManager:
    """
    Manages filetree configuration.

    Priority order:
    1. Environment variables
    2. JSON config file (FILETREE_CONFIG_FILE)
    3. Schema defaults
    """

    def __init__(self):
        self._cache: Dict[str, Any] = {}
        self._loaded = False
        self._config_path: Optional[Path] = None
        self._conversion_errors: Dict[str, str] = {}
        self._load()

    def _load(self):
        """Load configuration from all sources."""
        # Load .env file without clobbering the real environment
        load_dotenv(find_dotenv(usecwd=True))

        config_field = get_schema_by_key("FILETREE_CONFIG_FILE")
        self._config_path = Path(
            os.environ.get(config_field.env_var) or config_field.default
        )

        json_config = ConfigLoader.load(self._config_path, dict) or {}

        for field in CONFIG_SCHEMA:
            # Priority: env var > json config > default
            value = os.environ.get(field.env_var)

            if value is None and field.key in json_config:
                value = json_config[field.key]

            if value is None:
                value = field.default

            self._cache[field.key] = self._convert_type(value, field)

        self._loaded = True
        GateLogger.set_level(self._cache.get("FILETREE_LOG_LEVEL") or "INFO")

    def _convert_type(self, value: Any, field: ConfigField) -> Any:
        """Convert value to the field's type, falling back to its default."""
        self._conversion_errors.pop(field.key, None)
        if value is None or value == "":
            return None

        try:
            if field.config_type == ConfigType.INTEGER:
                return int(value)
            return str(value)
        except (ValueError, TypeError):
            error = f"Invalid integer for {field.key}: {value}"
            self._conversion_errors[field.key] = error
            _log.warning(f"{error}; using default {field.default!r}")
            return field.default

    @property
    def config_path(self) -> Optional[Path]:
        """Path of the JSON overrides file."""
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if not self._loaded:
            self._load()
        value = self._cache.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any, persist: bool = False) -> bool:
        """
        Set a configuration value.

        Args:
            key: Config key
            value: New value
            persist: Whether to save to the JSON config file

        Returns:
            True if successful
        """
        field = get_schema_by_key(key)
        if not field:
            return False

        self._cache[key] = self._convert_type(value, field)

        if key == "FILETREE_LOG_LEVEL" and self._cache[key]:
            GateLogger.set_level(self._cache[key])

        if persist:
            return self._save_json()

        return True

    def _save_json(self) -> bool:
        """Save non-default values to the JSON config file."""
        to_save = {}
        for field in CONFIG_SCHEMA:
            # The file's own location only comes from the environment
            if field.key == "FILETREE_CONFIG_FILE":
                continue
            value = self._cache.get(field.key)
            if value is None or value == field.default:
                continue
            to_save[field.key] = value

        return ConfigLoader.save(self._config_path, to_save)

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return {field.key: self._cache.get(field.key) for field in CONFIG_SCHEMA}

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            (is_valid, list of error messages)
        """
        errors = list(self._conversion_errors.values())

        for field in CONFIG_SCHEMA:
            value = self._cache.get(field.key)
            if value is None:
                continue

            if field.options and str(value).upper() not in field.options:
                errors.append(f"Invalid option for {field.key}: {value}")

            if field.key == "FILETREE_ENCODING":
                import codecs
                try:
                    codecs.lookup(value)
                except LookupError:
                    errors.append(f"Unknown encoding for {field.key}: {value}")

        for error in errors:
            _log.warning(error)

        return len(errors) == 0, errors


# Global instance
_manager: Optional[ConfigManager] = None


def get_manager() -> ConfigManager:
    """Get or create the global ConfigManager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def reload():
    """Reload configuration from files."""
    global _manager
    _manager = ConfigManager()


# Convenience functions
def get(key: str, default: Any = None) -> Any:
    """Get a config value."""
    return get_manager().get(key, default)


def set(key: str, value: Any, persist: bool = False) -> bool:
    """Set a config value."""
    return get_manager().set(key, value, persist)


def get_all() -> Dict:
    """Get all config values."""
    return get_manager().get_all()


def validate() -> Tuple[bool, List[str]]:
    """Validate configuration."""
    return get_manager().validate()


def get_schema() -> Dict:
    """Get schema as dict."""
    return schema_to_dict()


__all__ = [
    "ConfigManager",
    "ConfigField",
    "ConfigType",
    "ConfigCategory",
    "get_manager",
    "reload",
    "get",
    "set",
    "get_all",
    "validate",
    "get_schema",
]
