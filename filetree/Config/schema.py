"""
Configuration schema for filetree.

Defines all configurable options with metadata for validation
and documentation.
"""

from enum import Enum
from typing import Optional, List, Any
from dataclasses import dataclass


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    INTEGER = "integer"
    PATH = "path"          # File system path


class ConfigCategory(Enum):
    """Configuration categories for grouping."""
    IO = "io"
    SERIALIZATION = "serialization"
    LOGGING = "logging"


@dataclass
class ConfigField:
    """Definition of a configuration field."""
    key: str
    description: str
    config_type: ConfigType
    category: ConfigCategory
    default: Any = None
    env_var: str = None          # Override env var name (defaults to key)
    options: List[str] = None    # For enumerated types

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === IO ===
    ConfigField(
        key="FILETREE_ENCODING",
        description="Text encoding used by File.read() and File.write()",
        config_type=ConfigType.STRING,
        category=ConfigCategory.IO,
        default="utf-8",
    ),
    ConfigField(
        key="FILETREE_CONFIG_FILE",
        description="JSON file holding persisted configuration overrides",
        config_type=ConfigType.PATH,
        category=ConfigCategory.IO,
        default="filetree.json",
    ),

    # === Serialization ===
    ConfigField(
        key="FILETREE_JSON_INDENT",
        description="Indent used by File.write_object() for JSON (unset = compact)",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SERIALIZATION,
        default=None,
    ),

    # === Logging ===
    ConfigField(
        key="FILETREE_LOG_LEVEL",
        description="Level of the filetree logger",
        config_type=ConfigType.STRING,
        category=ConfigCategory.LOGGING,
        default="INFO",
        options=["DEBUG", "INFO", "WARNING", "ERROR"],
    ),
]


def get_schema_by_key(key: str) -> Optional[ConfigField]:
    """Get schema field by key."""
    for field in CONFIG_SCHEMA:
        if field.key == key:
            return field
    return None


def get_schema_by_category(category: ConfigCategory) -> List[ConfigField]:
    """Get all fields in a category."""
    return [f for f in CONFIG_SCHEMA if f.category == category]


def schema_to_dict() -> dict:
    """Convert schema to dict."""
    result = {}
    for cat in ConfigCategory:
        fields = get_schema_by_category(cat)
        result[cat.value] = [
            {
                "key": f.key,
                "description": f.description,
                "type": f.config_type.value,
                "default": f.default,
                "options": f.options,
            }
            for f in fields
        ]
    return result
