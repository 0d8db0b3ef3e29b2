"""
tracegrid.config.loader - Locate, parse and merge configuration files.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

from tracegrid.config.defaults import DEFAULT_CONFIG
from tracegrid.errors import ConfigError

CONFIG_FILENAME = ".tracegrid.toml"


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML content, keeping formatting for round-trip edits."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML content into plain Python types."""
    return parse_toml_document(content).unwrap()


def find_config_file(start: Path) -> Optional[Path]:
    """Find the nearest config file, searching upward from ``start``.

    Args:
        start: Directory (or file) to start searching from

    Returns:
        Path to the config file, or None if none exists
    """
    current = start if start.is_dir() else start.parent
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables merge key by key; any other value in ``override``
    replaces the base value.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        config_path: Config file to read; defaults only when None

    Returns:
        Complete configuration dict

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config: {e}", path=str(config_path)) from e

    try:
        user_config = parse_toml(content)
    except TOMLKitError as e:
        raise ConfigError(f"invalid TOML: {e}", path=str(config_path)) from e

    config = merge_configs(DEFAULT_CONFIG, user_config)
    config["_config_path"] = str(config_path)
    return config


def resolve_symbol_index(config: Dict[str, Any], override: Optional[Path] = None) -> Path:
    """Resolve the symbol index path, relative to the config file's directory."""
    if override is not None:
        return override
    index = Path(config.get("symbols", {}).get("index", "symbols.json"))
    if index.is_absolute() or "_config_path" not in config:
        return index
    return Path(config["_config_path"]).parent / index
