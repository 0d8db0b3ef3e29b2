"""Filtering - Cascading reduction of the matrix dimensions.

Hiding cells one by one would leave rows and columns whose cells were all
suppressed on screen as empty stripes. Instead the filter decides which
cells are relevant, keeps only the rows holding a relevant cell and the
columns those cells touch, and rebuilds the groups from the survivors.

Cell content is computed here once to detect relevance and again by the
builder for the reduced grid. Tracking relevance incrementally would avoid
the second pass, at the cost of extra bookkeeping.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Collection, Iterable, Sequence

from tracegrid.matrix.cells import build_cell
from tracegrid.matrix.models import MatrixCell, MatrixFilter, Symbol, SymbolGroup

logger = logging.getLogger(__name__)


def is_relevant(cell: MatrixCell, matrix_filter: MatrixFilter) -> bool:
    """Decide whether a cell keeps its row and column in a filtered matrix.

    With a relation-type restriction, a cell must carry at least one of
    the restricted relations. Then exactly one active show toggle selects
    only empty, only broken or only valid cells; any other combination
    keeps everything that passed the type restriction.
    """
    if matrix_filter.relationship_types:
        if not set(cell.relationships) & set(matrix_filter.relationship_types):
            return False

    show = (matrix_filter.show_valid, matrix_filter.show_broken, matrix_filter.show_empty)
    if show == (False, False, True):
        return cell.count == 0
    if show == (False, True, False):
        return cell.count > 0 and not cell.is_valid
    if show == (True, False, False):
        return cell.count > 0 and cell.is_valid
    return True


def find_relevant(
    rows: Sequence[Symbol],
    columns: Sequence[Symbol],
    catalog: Collection[str],
    matrix_filter: MatrixFilter,
) -> tuple[set[int], set[int]]:
    """Return indices of rows and columns that touch a relevant cell."""
    target_lookup = {symbol.name for symbol in columns}
    kept_rows: set[int] = set()
    kept_columns: set[int] = set()

    for row_idx, source in enumerate(rows):
        for col_idx, target in enumerate(columns):
            cell = build_cell(
                source, target, target_lookup, catalog, matrix_filter.relationship_types
            )
            if is_relevant(cell, matrix_filter):
                kept_rows.add(row_idx)
                kept_columns.add(col_idx)

    return kept_rows, kept_columns


def regroup(groups: Iterable[SymbolGroup], kept: Sequence[Symbol]) -> list[SymbolGroup]:
    """Intersect groups with the kept symbols.

    Group order, display names and colors are preserved; groups left
    without members are dropped.
    """
    kept_ids = {symbol.id for symbol in kept}
    result = []
    for group in groups:
        members = tuple(s for s in group.symbols if s.id in kept_ids)
        if members:
            result.append(replace(group, symbols=members))
    return result


def reduce_groups(
    row_groups: Sequence[SymbolGroup],
    column_groups: Sequence[SymbolGroup],
    catalog: Collection[str],
    matrix_filter: MatrixFilter,
) -> tuple[list[SymbolGroup], list[SymbolGroup]]:
    """Shrink row and column groups to those touching a relevant cell.

    Never grows either dimension and never drops a row or column that
    holds a relevant cell.
    """
    rows = [s for g in row_groups for s in g.symbols]
    columns = [s for g in column_groups for s in g.symbols]
    kept_rows, kept_columns = find_relevant(rows, columns, catalog, matrix_filter)

    logger.debug(
        "Cascading reduction kept %d/%d rows and %d/%d columns",
        len(kept_rows),
        len(rows),
        len(kept_columns),
        len(columns),
    )

    return (
        regroup(row_groups, [rows[i] for i in sorted(kept_rows)]),
        regroup(column_groups, [columns[i] for i in sorted(kept_columns)]),
    )


__all__ = [
    "is_relevant",
    "find_relevant",
    "regroup",
    "reduce_groups",
]
