"""Matrix models - Value types for the traceability matrix.

This module defines the immutable snapshots produced by a matrix build:
- Symbol: An artifact supplied by the upstream indexer
- SymbolGroup: Symbols of one kind, sorted and colored for display
- MatrixCell: The relations from one source symbol to one target symbol
- TraceSummary: Coverage totals, orphaned and unlinked symbols
- MatrixMetadata: Generation info
- MatrixData: The complete matrix artifact
- MatrixFilter / ExportOptions: Request options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping


class DefinitionType(Enum):
    """How a symbol was declared in its source unit."""

    HEADER = "hdef"
    DEFINITION = "def"


@dataclass(frozen=True)
class Symbol:
    """A typed, named engineering artifact.

    Attributes:
        name: Identifier, unique within its declaring source unit.
        kind: Artifact class (e.g., "requirement", "testcase").
        source: Reference to the declaring source unit (a file path).
        definition: Header definition or ordinary definition.
        properties: Ordered mapping of property name to its values. A
            property may repeat, so each name maps to every value seen.
    """

    name: str
    kind: str
    source: str = ""
    definition: DefinitionType = DefinitionType.DEFINITION
    properties: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def create(
        cls,
        name: str,
        kind: str,
        source: str = "",
        definition: DefinitionType | str = DefinitionType.DEFINITION,
        properties: Mapping[str, Iterable[str]] | Iterable[tuple[str, Iterable[str]]] | None = None,
    ) -> Symbol:
        """Create a symbol, normalizing property values to tuples.

        ``properties`` may be a mapping or a sequence of ``(name, values)``
        pairs; repeated names are merged in order.
        """
        merged: dict[str, list[str]] = {}
        items = properties.items() if isinstance(properties, Mapping) else (properties or ())
        for prop_name, values in items:
            if isinstance(values, str):
                values = [values]
            merged.setdefault(prop_name, []).extend(values)
        return cls(
            name=name,
            kind=kind,
            source=source,
            definition=DefinitionType(definition),
            properties=MappingProxyType({k: tuple(v) for k, v in merged.items()}),
        )

    @property
    def id(self) -> str:
        """Project-wide identifier: ``<source unit>:<name>``."""
        return f"{self.source}:{self.name}"

    @property
    def file_kind(self) -> str:
        """Artifact file kind of the source unit (its lowercased suffix)."""
        return PurePath(self.source).suffix.lower()

    def __str__(self) -> str:
        return f"{self.kind} {self.name}"


@dataclass(frozen=True)
class SymbolGroup:
    """Symbols of a single kind.

    Attributes:
        kind: The artifact kind shared by every member.
        display_name: Human readable group name (e.g., "Requirements").
        symbols: Members sorted by name.
        color: Display color token.
    """

    kind: str
    display_name: str
    symbols: tuple[Symbol, ...]
    color: str

    @property
    def count(self) -> int:
        return len(self.symbols)


@dataclass(frozen=True)
class MatrixCell:
    """Relations from one source symbol to one target symbol.

    Attributes:
        relationships: Distinct relation property names, in first-seen order.
        is_valid: True when every matched reference resolves to a known
            target. Vacuously true for an empty cell.
        count: Number of matched references (not deduplicated).
        raw_values: Unparsed property values that produced a match.
        tooltip: Human readable summary of the cell.
    """

    relationships: tuple[str, ...] = ()
    is_valid: bool = True
    count: int = 0
    raw_values: tuple[str, ...] = ()
    tooltip: str = ""

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def is_broken(self) -> bool:
        return self.count > 0 and not self.is_valid

    @property
    def text(self) -> str:
        """Cell text for tabular exports."""
        return "; ".join(self.relationships)


@dataclass(frozen=True)
class DanglingReference:
    """A relation reference whose target identifier names no known symbol."""

    source_name: str
    relation: str
    target_name: str

    def __str__(self) -> str:
        return f"{self.source_name} --[{self.relation}]--> {self.target_name} (missing)"


@dataclass(frozen=True)
class TraceSummary:
    """Aggregated coverage for a matrix.

    Attributes:
        total_relationships: Sum of every cell count.
        valid_relationships: Sum of counts of valid cells.
        broken_relationships: Sum of counts of invalid cells.
        coverage_by_type: Number of cells carrying each relation type.
        orphaned_symbols: Column symbols with no incoming references.
        unlinked_symbols: Row symbols with no outgoing references.
        dangling_references: References to identifiers no symbol declares.
    """

    total_relationships: int = 0
    valid_relationships: int = 0
    broken_relationships: int = 0
    coverage_by_type: Mapping[str, int] = field(default_factory=dict)
    orphaned_symbols: tuple[Symbol, ...] = ()
    unlinked_symbols: tuple[Symbol, ...] = ()
    dangling_references: tuple[DanglingReference, ...] = ()

    @property
    def coverage_pct(self) -> int:
        """Valid share of all relationships, rounded half up to an integer."""
        ratio = self.valid_relationships / max(self.total_relationships, 1) * 100
        return int(ratio + 0.5)


@dataclass(frozen=True)
class MatrixMetadata:
    """Generation info attached to a matrix."""

    title: str
    description: str
    source_file: str
    generated_at: str
    symbol_count: int
    relationship_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class MatrixData:
    """A complete traceability matrix.

    ``matrix[i][j]`` is the cell from ``row_symbols[i]`` to
    ``column_symbols[j]``; the grid is always rectangular.
    """

    row_groups: tuple[SymbolGroup, ...]
    column_groups: tuple[SymbolGroup, ...]
    matrix: tuple[tuple[MatrixCell, ...], ...]
    summary: TraceSummary
    metadata: MatrixMetadata

    @property
    def row_symbols(self) -> list[Symbol]:
        return flatten_groups(self.row_groups)

    @property
    def column_symbols(self) -> list[Symbol]:
        return flatten_groups(self.column_groups)

    def iter_rows(self) -> Iterator[tuple[Symbol, tuple[MatrixCell, ...]]]:
        """Yield ``(row symbol, cells)`` pairs in display order."""
        return zip(self.row_symbols, self.matrix)

    def cell_for(self, source_name: str, target_name: str) -> MatrixCell | None:
        """Return the cell for a named source/target pair, if both are present."""
        rows = [s.name for s in self.row_symbols]
        cols = [s.name for s in self.column_symbols]
        if source_name not in rows or target_name not in cols:
            return None
        return self.matrix[rows.index(source_name)][cols.index(target_name)]


@dataclass(frozen=True)
class MatrixFilter:
    """Options narrowing a matrix build.

    Attributes:
        relationship_types: Relation names to include (empty = all).
        source_types: Row kinds to include (empty = all).
        target_types: Column kinds to include (empty = all).
        show_valid: Cells with valid relations count as relevant.
        show_broken: Cells with broken relations count as relevant.
        show_empty: Cells without relations count as relevant.
    """

    relationship_types: tuple[str, ...] = ()
    source_types: tuple[str, ...] = ()
    target_types: tuple[str, ...] = ()
    show_valid: bool = True
    show_broken: bool = True
    show_empty: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatrixFilter:
        """Create a MatrixFilter from a ``[filter]`` configuration section."""
        return cls(
            relationship_types=tuple(data.get("relationship_types", ())),
            source_types=tuple(data.get("source_types", ())),
            target_types=tuple(data.get("target_types", ())),
            show_valid=data.get("show_valid", True),
            show_broken=data.get("show_broken", True),
            show_empty=data.get("show_empty", True),
        )

    @property
    def reduces(self) -> bool:
        """True when the filter can shrink the matrix dimensions."""
        return bool(self.relationship_types) or not (
            self.show_valid and self.show_broken and self.show_empty
        )


class ExportFormat(Enum):
    CSV = "csv"
    JSON = "json"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class ExportOptions:
    """Options for serializing a matrix."""

    format: ExportFormat = ExportFormat.CSV
    include_metadata: bool = True
    include_summary: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExportOptions:
        """Create ExportOptions from an ``[export]`` configuration section."""
        return cls(
            format=ExportFormat(data.get("format", "csv")),
            include_metadata=data.get("include_metadata", True),
            include_summary=data.get("include_summary", True),
        )


def flatten_groups(groups: Iterable[SymbolGroup]) -> list[Symbol]:
    """Concatenate group members in group order."""
    return [symbol for group in groups for symbol in group.symbols]


__all__ = [
    "DefinitionType",
    "Symbol",
    "SymbolGroup",
    "MatrixCell",
    "DanglingReference",
    "TraceSummary",
    "MatrixMetadata",
    "MatrixData",
    "MatrixFilter",
    "ExportFormat",
    "ExportOptions",
    "flatten_groups",
]
