"""Coverage - Aggregate a matrix grid into a TraceSummary."""

from __future__ import annotations

from typing import Collection, Iterable, Sequence

from tracegrid.matrix.cells import iter_references
from tracegrid.matrix.models import (
    DanglingReference,
    MatrixCell,
    Symbol,
    SymbolGroup,
    TraceSummary,
)


def find_orphaned_symbols(
    columns: Sequence[Symbol], matrix: Sequence[Sequence[MatrixCell]]
) -> list[Symbol]:
    """Column symbols that no row references."""
    has_incoming = {
        col for row in matrix for col, cell in enumerate(row) if cell.count > 0
    }
    return [s for i, s in enumerate(columns) if i not in has_incoming]


def find_unlinked_symbols(
    rows: Sequence[Symbol], matrix: Sequence[Sequence[MatrixCell]]
) -> list[Symbol]:
    """Row symbols that reference no column."""
    has_outgoing = {
        row_idx for row_idx, row in enumerate(matrix) if any(c.count > 0 for c in row)
    }
    return [s for i, s in enumerate(rows) if i not in has_outgoing]


def find_dangling_references(
    rows: Iterable[Symbol],
    known_names: Collection[str],
    catalog: Collection[str],
    relation_types: Collection[str] = (),
) -> list[DanglingReference]:
    """References from row symbols to identifiers no symbol declares."""
    dangling = []
    for symbol in rows:
        for relation, _value, target_id in iter_references(symbol, catalog, relation_types):
            if target_id not in known_names:
                dangling.append(DanglingReference(symbol.name, relation, target_id))
    return dangling


def summarize(
    row_groups: Sequence[SymbolGroup],
    column_groups: Sequence[SymbolGroup],
    matrix: Sequence[Sequence[MatrixCell]],
    dangling_references: Iterable[DanglingReference] = (),
) -> TraceSummary:
    """Compute relationship totals and orphaned/unlinked symbols.

    Totals sum cell counts bucketed by validity. ``coverage_by_type``
    counts cells, not references: a cell contributes once per distinct
    relation it carries.
    """
    total = valid = broken = 0
    by_type: dict[str, int] = {}

    for row in matrix:
        for cell in row:
            total += cell.count
            if cell.is_valid:
                valid += cell.count
            else:
                broken += cell.count
            for relation in cell.relationships:
                by_type[relation] = by_type.get(relation, 0) + 1

    rows = [s for g in row_groups for s in g.symbols]
    columns = [s for g in column_groups for s in g.symbols]

    return TraceSummary(
        total_relationships=total,
        valid_relationships=valid,
        broken_relationships=broken,
        coverage_by_type=by_type,
        orphaned_symbols=tuple(find_orphaned_symbols(columns, matrix)),
        unlinked_symbols=tuple(find_unlinked_symbols(rows, matrix)),
        dangling_references=tuple(dangling_references),
    )


__all__ = [
    "find_orphaned_symbols",
    "find_unlinked_symbols",
    "find_dangling_references",
    "summarize",
]
