"""
tracegrid.config - Configuration loading and defaults
"""

from tracegrid.config.defaults import DEFAULT_CONFIG
from tracegrid.config.loader import (
    CONFIG_FILENAME,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
    resolve_symbol_index,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "resolve_symbol_index",
]
