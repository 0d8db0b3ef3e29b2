"""
tracegrid.commands.catalog_cmd - List relation keywords.
"""

import argparse
from pathlib import Path

from tracegrid.config import find_config_file, load_config
from tracegrid.keywords import FILE_TYPES
from tracegrid.matrix import RelationshipCatalog


def run(args: argparse.Namespace) -> int:
    """Run the catalog command."""
    config_path = args.config or find_config_file(Path.cwd())
    config = load_config(config_path if config_path and config_path.exists() else None)
    extra = config.get("catalog", {}).get("extra_relations", [])
    catalog = RelationshipCatalog(extra_relations=extra)

    if not getattr(args, "by_file_type", False):
        for name in catalog:
            print(name)
        return 0

    for file_type in FILE_TYPES:
        relations = file_type.relation_names()
        listed = ", ".join(relations) if relations else "(none)"
        print(f"{file_type.file_extension:6} {file_type.display_name:16} {listed}")
    if extra:
        print(f"{'config':6} {'Extensions':16} {', '.join(extra)}")
    return 0
