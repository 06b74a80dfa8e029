"""
Structured-text codecs for File.read_object() / File.write_object().

The codec is picked from the file extension: ``.toml`` selects TOML, anything
else (including no extension) selects JSON.
"""

import json
import os
import tomllib
from collections.abc import Mapping
from typing import Any, Optional, Type

import tomli_w
from pydantic import BaseModel, ValidationError

from .errors import ObjectParseError, ObjectSerializationError

JSON = "json"
TOML = "toml"
TOML_EXTENSION = ".toml"


def codec_for(path: str) -> str:
    """Return the codec name for a path."""
    if os.path.splitext(path)[1] == TOML_EXTENSION:
        return TOML
    return JSON


def encode(value: Any, codec: str, indent: Optional[int] = None, path: Optional[str] = None) -> str:
    """
    Serialize a value.

    Pydantic models are dumped in JSON mode first.

    Raises:
        ObjectSerializationError: If the value cannot be represented
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", exclude_none=codec == TOML)

    if codec == TOML and not isinstance(value, Mapping):
        raise ObjectSerializationError(
            f"TOML documents must be tables, got {type(value).__name__}",
            path=path,
            codec=codec,
        )

    try:
        if codec == TOML:
            return tomli_w.dumps(value)
        if indent is None:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        return json.dumps(value, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ObjectSerializationError(
            f"Cannot encode {type(value).__name__} as {codec}: {e}",
            path=path,
            codec=codec,
        ) from e


def decode(text: str, codec: str, model: Optional[Type[BaseModel]] = None, path: Optional[str] = None) -> Any:
    """
    Deserialize text, optionally validating it into a pydantic model.

    Raises:
        ObjectParseError: If the text does not parse or fails validation
    """
    try:
        if codec == TOML:
            data = tomllib.loads(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ObjectParseError(
            f"Invalid {codec} content: {e}",
            path=path,
            codec=codec,
        ) from e

    if model is None:
        return data

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ObjectParseError(
            f"Content does not match {model.__name__}: {e}",
            path=path,
            codec=codec,
        ) from e
