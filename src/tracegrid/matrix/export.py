"""Matrix export - Serialize MatrixData to CSV, JSON and markdown.

The CSV layout is::

    <banner>
    Title,...            (metadata block, optional)
    Summary              (summary block, optional)
    Relationship Types
    Traceability Matrix
    Source \\ Target,<target>,...
    <source>,<cell text>,...

Fields containing a separator, quote or line break are quoted with inner
quotes doubled. Output is deterministic apart from the generation time.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from tracegrid.matrix.models import (
    ExportFormat,
    ExportOptions,
    MatrixData,
    Symbol,
    SymbolGroup,
)

CSV_BANNER = "TraceGrid Traceability Matrix"
MATRIX_CORNER = "Source \\ Target"
NO_RELATIONSHIPS = "No relationships found"


def has_relationships(data: MatrixData) -> bool:
    """True when the grid has at least one cell with a relation."""
    return bool(data.matrix) and data.summary.total_relationships > 0


class _CsvWriter:
    """``csv.writer`` that also quotes fields holding a bare carriage return.

    With a ``\\n`` line terminator, ``QUOTE_MINIMAL`` only quotes ``\\n``
    on older interpreters; a lone ``\\r`` would split the record.
    """

    def __init__(self, output: io.StringIO) -> None:
        self._minimal = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        self._quoted = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

    def writerow(self, row: list[Any]) -> None:
        if any(isinstance(value, str) and "\r" in value for value in row):
            self._quoted.writerow(row)
        else:
            self._minimal.writerow(row)


def to_csv(data: MatrixData, options: ExportOptions | None = None) -> str:
    """Render a matrix as CSV.

    Args:
        data: The matrix to export.
        options: Which optional blocks to include (default: all).

    Returns:
        CSV text, one record per line, ``\\n`` line endings.
    """
    options = options or ExportOptions()
    output = io.StringIO()
    writer = _CsvWriter(output)

    if options.include_metadata:
        meta = data.metadata
        writer.writerow([CSV_BANNER])
        writer.writerow(["Title", meta.title])
        writer.writerow(["Description", meta.description])
        writer.writerow(["Source File", meta.source_file])
        writer.writerow(["Generated At", meta.generated_at])
        writer.writerow(["Symbol Count", meta.symbol_count])
        writer.writerow([])

    if options.include_summary:
        summary = data.summary
        writer.writerow(["Summary"])
        writer.writerow(["Total Relationships", summary.total_relationships])
        writer.writerow(["Valid Relationships", summary.valid_relationships])
        writer.writerow(["Broken Relationships", summary.broken_relationships])
        writer.writerow(["Coverage Percentage", f"{summary.coverage_pct}%"])
        writer.writerow([])
        writer.writerow(["Relationship Types"])
        for relation, count in summary.coverage_by_type.items():
            writer.writerow([relation, count])
        writer.writerow([])

    writer.writerow(["Traceability Matrix"])
    if not has_relationships(data):
        writer.writerow([NO_RELATIONSHIPS])
        return output.getvalue()

    writer.writerow([MATRIX_CORNER] + [s.name for s in data.column_symbols])
    for source, cells in data.iter_rows():
        writer.writerow([source.name] + [cell.text for cell in cells])

    return output.getvalue()


def _symbol_dict(symbol: Symbol) -> dict[str, Any]:
    return {
        "id": symbol.id,
        "name": symbol.name,
        "kind": symbol.kind,
        "source": symbol.source,
        "definition": symbol.definition.value,
    }


def _group_dict(group: SymbolGroup) -> dict[str, Any]:
    return {
        "kind": group.kind,
        "display_name": group.display_name,
        "color": group.color,
        "count": group.count,
        "symbols": [s.name for s in group.symbols],
    }


def serialize_matrix(data: MatrixData, options: ExportOptions | None = None) -> dict[str, Any]:
    """Serialize a matrix to a JSON-compatible dict.

    Args:
        data: The matrix to serialize.
        options: Which optional blocks to include (default: all).

    Returns:
        Dict with groups, cells and, optionally, summary and metadata.
    """
    options = options or ExportOptions()
    result: dict[str, Any] = {
        "row_groups": [_group_dict(g) for g in data.row_groups],
        "column_groups": [_group_dict(g) for g in data.column_groups],
        "matrix": [
            [
                {
                    "relationships": list(cell.relationships),
                    "is_valid": cell.is_valid,
                    "count": cell.count,
                    "raw_values": list(cell.raw_values),
                }
                for cell in row
            ]
            for row in data.matrix
        ],
    }

    if options.include_summary:
        summary = data.summary
        result["summary"] = {
            "total_relationships": summary.total_relationships,
            "valid_relationships": summary.valid_relationships,
            "broken_relationships": summary.broken_relationships,
            "coverage_pct": summary.coverage_pct,
            "coverage_by_type": dict(summary.coverage_by_type),
            "orphaned_symbols": [_symbol_dict(s) for s in summary.orphaned_symbols],
            "unlinked_symbols": [_symbol_dict(s) for s in summary.unlinked_symbols],
            "dangling_references": [
                {"source": d.source_name, "relation": d.relation, "target": d.target_name}
                for d in summary.dangling_references
            ],
        }

    if options.include_metadata:
        meta = data.metadata
        result["metadata"] = {
            "title": meta.title,
            "description": meta.description,
            "source_file": meta.source_file,
            "generated_at": meta.generated_at,
            "symbol_count": meta.symbol_count,
            "relationship_types": list(meta.relationship_types),
        }

    return result


def to_json(data: MatrixData, options: ExportOptions | None = None) -> str:
    return json.dumps(serialize_matrix(data, options), indent=2)


def _md_escape(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def to_markdown(data: MatrixData, options: ExportOptions | None = None) -> str:
    """Render a matrix as a markdown table with optional summary."""
    options = options or ExportOptions()
    lines = [f"# {data.metadata.title}", ""]

    if options.include_metadata:
        meta = data.metadata
        lines.extend(
            [
                f"- **Source File:** {meta.source_file or '-'}",
                f"- **Generated At:** {meta.generated_at}",
                f"- **Symbol Count:** {meta.symbol_count}",
                "",
            ]
        )

    if options.include_summary:
        summary = data.summary
        lines.extend(
            [
                "## Summary",
                "",
                f"- Total relationships: {summary.total_relationships}",
                f"- Valid relationships: {summary.valid_relationships}",
                f"- Broken relationships: {summary.broken_relationships}",
                f"- Coverage: {summary.coverage_pct}%",
                "",
            ]
        )

    lines.extend(["## Traceability Matrix", ""])
    if not has_relationships(data):
        lines.extend([f"*{NO_RELATIONSHIPS}*", ""])
        return "\n".join(lines)

    columns = [_md_escape(s.name) for s in data.column_symbols]
    lines.append("| " + " | ".join([_md_escape(MATRIX_CORNER)] + columns) + " |")
    lines.append("|" + "---|" * (len(columns) + 1))
    for source, cells in data.iter_rows():
        row = [_md_escape(source.name)] + [_md_escape(c.text) or "-" for c in cells]
        lines.append("| " + " | ".join(row) + " |")
    lines.append("")
    return "\n".join(lines)


def export_matrix(data: MatrixData, options: ExportOptions | None = None) -> str:
    """Serialize a matrix in the format named by ``options``."""
    options = options or ExportOptions()
    if options.format is ExportFormat.JSON:
        return to_json(data, options)
    if options.format is ExportFormat.MARKDOWN:
        return to_markdown(data, options)
    return to_csv(data, options)


__all__ = [
    "CSV_BANNER",
    "NO_RELATIONSHIPS",
    "to_csv",
    "serialize_matrix",
    "to_json",
    "to_markdown",
    "export_matrix",
]
