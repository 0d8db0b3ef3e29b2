"""Matrix module - Traceability matrix construction.

Exports:
- Symbol, SymbolGroup, MatrixCell, MatrixData: Value types
- MatrixFilter, ExportOptions, ExportFormat: Request options
- TraceSummary, MatrixMetadata, DanglingReference: Build results
- RelationshipCatalog: Relation property names
- MatrixBuilder: Builds a MatrixData from a symbol set
- export_matrix, to_csv, to_json, to_markdown: Serializers
"""

from tracegrid.matrix.builder import MatrixBuilder
from tracegrid.matrix.catalog import RelationshipCatalog
from tracegrid.matrix.export import export_matrix, serialize_matrix, to_csv, to_json, to_markdown
from tracegrid.matrix.models import (
    DanglingReference,
    DefinitionType,
    ExportFormat,
    ExportOptions,
    MatrixCell,
    MatrixData,
    MatrixFilter,
    MatrixMetadata,
    Symbol,
    SymbolGroup,
    TraceSummary,
)

__all__ = [
    "DefinitionType",
    "Symbol",
    "SymbolGroup",
    "MatrixCell",
    "MatrixData",
    "MatrixMetadata",
    "TraceSummary",
    "DanglingReference",
    "MatrixFilter",
    "ExportFormat",
    "ExportOptions",
    "RelationshipCatalog",
    "MatrixBuilder",
    "export_matrix",
    "serialize_matrix",
    "to_csv",
    "to_json",
    "to_markdown",
]
