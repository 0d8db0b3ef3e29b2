"""
tracegrid - Traceability matrices for engineering model artifacts

tracegrid reads the symbols an indexer extracted from requirement, test,
function, feature and block models, and builds a dense source-by-target
matrix of their declared relations: which artifacts relate, which
references are broken, and which artifacts are orphaned or unlinked.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tracegrid")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from tracegrid.engine import TraceabilityEngine
from tracegrid.errors import ConfigError, SymbolSourceUnavailableError, TraceGridError
from tracegrid.matrix import (
    ExportFormat,
    ExportOptions,
    MatrixBuilder,
    MatrixData,
    MatrixFilter,
    RelationshipCatalog,
    Symbol,
)
from tracegrid.sources import JsonSymbolSource, StaticSymbolSource

__all__ = [
    "__version__",
    "TraceabilityEngine",
    "MatrixBuilder",
    "MatrixData",
    "MatrixFilter",
    "ExportFormat",
    "ExportOptions",
    "RelationshipCatalog",
    "Symbol",
    "JsonSymbolSource",
    "StaticSymbolSource",
    "TraceGridError",
    "SymbolSourceUnavailableError",
    "ConfigError",
]
