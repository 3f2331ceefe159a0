#!/usr/bin/env python3
"""
ADMONFENCE CONFIG LOADER
------------------------
Builds the TypeMap used by the ConversionPipeline. The built-in table covers
the MkDocs Material types; an optional YAML file extends or replaces it:

    default: note
    replace: false
    types:
      bug: danger
      todo: warning

Author: AdmonFence Team
Date: 2026-10-18
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from admonfence.core.models import DEFAULT_FALLBACK_TYPE, DEFAULT_TYPE_MAPPING, TypeMap

logger = logging.getLogger("admonfence.config")


class ConfigError(RuntimeError):
    """Raised when a mapping file cannot be read or has the wrong shape."""


# Destination names must stay visible to FenceValidator.OPEN_FENCE
CONTAINER_NAME = re.compile(r'^[\w-]+$')


def _require_name(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{where} must be a non-empty string, got {value!r}")
    return value.strip()


def _require_container(value: Any, where: str) -> str:
    name = _require_name(value, where)
    if not CONTAINER_NAME.match(name):
        raise ConfigError(f"{where} must contain only letters, digits, '_' or '-', got {name!r}")
    return name


def _parse_types(types: Dict[Any, Any], source: str) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    spelled: Dict[str, str] = {}
    for key, val in types.items():
        raw_key = _require_name(str(key), f"{source}: type key")
        lowered = raw_key.lower()
        if lowered in parsed:
            raise ConfigError(f"{source}: type keys {spelled[lowered]!r} and {raw_key!r} collide")
        parsed[lowered] = _require_container(val, f"{source}: types.{raw_key}")
        spelled[lowered] = raw_key
    return parsed


def _parse_mapping(data: Any, source: str) -> Dict[str, Any]:
    if data is None:
        return {"default": None, "replace": False, "types": {}}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")

    unknown = set(data) - {"default", "replace", "types"}
    if unknown:
        raise ConfigError(f"{source}: unknown keys {sorted(unknown)}")

    types = data.get("types") or {}
    if not isinstance(types, dict):
        raise ConfigError(f"{source}: 'types' must be a mapping of source -> destination")

    replace = data.get("replace", False)
    if not isinstance(replace, bool):
        raise ConfigError(f"{source}: 'replace' must be true or false, got {replace!r}")

    return {
        "default": _require_container(data["default"], f"{source}: 'default'") if "default" in data else None,
        "replace": replace,
        "types": _parse_types(types, source),
    }


def load_type_map(path: Optional[Union[str, Path]] = None, default_type: Optional[str] = None) -> TypeMap:
    """
    Returns the effective TypeMap. `default_type` (from the CLI) wins over
    the file's 'default'.
    """
    mapping = dict(DEFAULT_TYPE_MAPPING)
    default = DEFAULT_FALLBACK_TYPE

    if path is not None:
        config_path = Path(path)
        yaml = YAML(typ='safe')
        try:
            raw = yaml.load(config_path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Unable to read mapping file {config_path}")
            raise ConfigError(f"Failed to read mapping file {config_path}: {e}")
        except YAMLError as e:
            raise ConfigError(f"Invalid YAML in mapping file {config_path}: {e}")

        parsed = _parse_mapping(raw, str(config_path))
        if parsed["replace"]:
            mapping = {}
        mapping.update(parsed["types"])
        if parsed["default"]:
            default = parsed["default"]
        logger.info(f"Loaded {len(parsed['types'])} type mappings from {config_path}")

    if default_type is not None:
        default = _require_container(default_type, "--default-type")

    return TypeMap(mapping=mapping, default=default)
