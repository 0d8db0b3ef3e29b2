"""
tracegrid.commands.summary_cmd - Coverage summary command.

Prints relationship totals, orphaned and unlinked symbols, and references
to identifiers that no symbol declares.
"""

import argparse
import json

from tracegrid.commands.matrix_cmd import build_matrix, load_engine
from tracegrid.matrix import ExportOptions, serialize_matrix


def run(args: argparse.Namespace) -> int:
    """Run the summary command."""
    config, engine = load_engine(args)
    data = build_matrix(args, config, engine)
    if data is None:
        return 1

    summary = data.summary

    if getattr(args, "json", False):
        payload = serialize_matrix(data, ExportOptions(include_metadata=False))["summary"]
        print(json.dumps(payload, indent=2))
        return 0

    print("Traceability Coverage")
    print("=" * 60)
    print(f"Rows: {len(data.row_symbols)}  Columns: {len(data.column_symbols)}")
    print(f"Total Relationships:  {summary.total_relationships}")
    print(f"Valid Relationships:  {summary.valid_relationships}")
    print(f"Broken Relationships: {summary.broken_relationships}")
    print(f"Coverage: {summary.coverage_pct}%")

    if summary.coverage_by_type:
        print()
        print("Relationship Types:")
        for relation, count in summary.coverage_by_type.items():
            print(f"  {relation}: {count}")

    print()
    if summary.orphaned_symbols:
        print(f"Orphaned Symbols ({len(summary.orphaned_symbols)}) - no incoming relations:")
        for symbol in summary.orphaned_symbols:
            print(f"  - {symbol.kind} {symbol.name} ({symbol.source})")
    else:
        print("✓ No orphaned symbols")

    if summary.unlinked_symbols:
        print(f"Unlinked Symbols ({len(summary.unlinked_symbols)}) - no outgoing relations:")
        for symbol in summary.unlinked_symbols:
            print(f"  - {symbol.kind} {symbol.name} ({symbol.source})")
    else:
        print("✓ No unlinked symbols")

    if summary.dangling_references:
        print(f"Dangling References ({len(summary.dangling_references)}):")
        for ref in summary.dangling_references:
            print(f"  - {ref}")

    return 0
