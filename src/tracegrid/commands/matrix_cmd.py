"""
tracegrid.commands.matrix_cmd - Generate traceability matrix command.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from tracegrid.config import find_config_file, load_config
from tracegrid.engine import TraceabilityEngine
from tracegrid.errors import SymbolSourceUnavailableError
from tracegrid.matrix import ExportFormat, ExportOptions, MatrixData, MatrixFilter


def run(args: argparse.Namespace) -> int:
    """Run the matrix command."""
    config, engine = load_engine(args)
    data = build_matrix(args, config, engine)
    if data is None:
        return 1

    options = build_export_options(args, config)
    output = engine.export(options, data)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        if not args.quiet:
            print(f"Generated: {args.output}")
    else:
        sys.stdout.write(output)

    return 0


def load_engine(args: argparse.Namespace) -> Tuple[Dict[str, Any], TraceabilityEngine]:
    """Load configuration and create an engine for it."""
    config_path = args.config or find_config_file(Path.cwd())
    config = load_config(config_path if config_path and config_path.exists() else None)
    engine = TraceabilityEngine.from_config(config, getattr(args, "symbols", None))
    return config, engine


def build_matrix(
    args: argparse.Namespace, config: Dict[str, Any], engine: TraceabilityEngine
) -> Optional[MatrixData]:
    """Build the matrix, reporting an unavailable symbol source on stderr."""
    try:
        return engine.build(build_filter(args, config))
    except SymbolSourceUnavailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run the indexer or pass --symbols PATH.", file=sys.stderr)
        return None


def build_filter(args: argparse.Namespace, config: Dict[str, Any]) -> Optional[MatrixFilter]:
    """Combine the [filter] config section with command-line overrides.

    Returns None when nothing narrows the matrix.
    """
    section = dict(config.get("filter", {}))

    for key in ("relationship_types", "source_types", "target_types"):
        values = getattr(args, key, None)
        if values:
            section[key] = values
    only = getattr(args, "only", None)
    if only:
        for key in ("valid", "broken", "empty"):
            section[f"show_{key}"] = key == only

    matrix_filter = MatrixFilter.from_dict(section)
    if matrix_filter == MatrixFilter():
        return None
    return matrix_filter


def build_export_options(args: argparse.Namespace, config: Dict[str, Any]) -> ExportOptions:
    """Combine the [export] config section with command-line overrides."""
    options = ExportOptions.from_dict(config.get("export", {}))
    return ExportOptions(
        format=ExportFormat(args.format) if getattr(args, "format", None) else options.format,
        include_metadata=options.include_metadata and not getattr(args, "no_metadata", False),
        include_summary=options.include_summary and not getattr(args, "no_summary", False),
    )
